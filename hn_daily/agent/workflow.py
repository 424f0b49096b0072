"""Workflow orchestrator for the digest pipeline.

This module runs the pipeline stages in order: listing, content
acquisition, HTML and text rendering, artifact writing and the optional PDF
export.

The two failure policies stay visible here. A ListingError is not caught:
it propagates before any file is written. Per-story acquisition failures
never reach this level, because ContentAcquirer records them as unavailable
slots.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from hn_daily.config.settings import Settings
from hn_daily.connectors.pdf_converter import PdfConverter
from hn_daily.engines.content_acquirer import AcquisitionResult, ContentAcquirer
from hn_daily.engines.digest_renderer import render_html
from hn_daily.engines.digest_writer import DigestArtifacts, pdf_path_for, write_digest
from hn_daily.engines.observability import (
    RunMetrics,
    log_stage_counts,
    summarize_results,
    write_run_log,
)
from hn_daily.engines.story_lister import Story, StoryLister
from hn_daily.engines.text_renderer import html_to_text


logger = logging.getLogger(__name__)


@dataclass
class WorkflowResult:
    """Result of a pipeline workflow execution.

    Attributes:
        artifacts: Paths of the generated digest files
        stories: Listed stories in display order
        results: Acquisition results, aligned with `stories`
        metrics: Run metrics collected during execution
    """
    artifacts: DigestArtifacts
    stories: list[Story]
    results: list[AcquisitionResult]
    metrics: RunMetrics


def _export_pdf(
    converter: PdfConverter,
    artifacts: DigestArtifacts,
    settings: Settings,
) -> str:
    """Attempt the optional PDF export and return its status.

    Never raises: a missing or failing converter only leaves the PDF out.
    """
    if not settings.pdf_enabled:
        logger.info("PDF export skipped: disabled in configuration")
        return "skipped"

    if not converter.is_available():
        logger.info(f"PDF export skipped: '{converter.command}' not found")
        return "skipped"

    result = converter.convert(artifacts.html_path, pdf_path_for(artifacts))
    if not result.success:
        return "failed"

    artifacts.pdf_path = pdf_path_for(artifacts)
    return "success"


def run_pipeline(
    settings: Settings,
    lister: StoryLister | None = None,
    acquirer: ContentAcquirer | None = None,
    converter: PdfConverter | None = None,
    today: date | None = None,
) -> WorkflowResult:
    """Execute the full digest pipeline.

    Orchestrates all pipeline stages:
    1. List the top stories (fail-fast)
    2. Acquire each story's article content (failure-isolated)
    3. Render the HTML digest
    4. Derive the plain-text digest from the HTML
    5. Write both files, named after the digest date
    6. Export a PDF if the converter is available (best-effort)
    7. Write a run log if configured

    Args:
        settings: Configuration settings for the pipeline
        lister: Story lister (defaults to one built from settings)
        acquirer: Content acquirer (defaults to one built from settings)
        converter: PDF converter (defaults to one built from settings)
        today: Digest date (defaults to the current local date)

    Returns:
        WorkflowResult with artifact paths, stories, results and metrics

    Raises:
        ListingError: If the story listing fails; no file is written
    """
    run_timestamp = datetime.now()
    day = today or run_timestamp.date()

    lister = lister or StoryLister(settings)
    acquirer = acquirer or ContentAcquirer(settings)
    converter = converter or PdfConverter(settings.pdf_command)

    logger.info("Starting digest pipeline...")

    # Stage 1: List stories. A ListingError aborts the run here.
    stories = lister.fetch(settings.story_limit)
    log_stage_counts("listed", len(stories))

    # Stage 2: Acquire article content, one slot per story
    logger.info("Fetching article content (this may take a minute)...")
    results = acquirer.acquire_all(stories)
    metrics = summarize_results(stories, results, run_timestamp)
    log_stage_counts("acquired", metrics.acquired_count)
    log_stage_counts("unavailable", metrics.unavailable_count)

    # Stage 3-4: Render
    html = render_html(stories, [result.content for result in results], day)
    text = html_to_text(html, settings.text_width)

    # Stage 5: Write guaranteed artifacts
    artifacts = write_digest(html, text, settings.output_path, day)

    # Stage 6: Optional PDF
    metrics.pdf_status = _export_pdf(converter, artifacts, settings)
    metrics.artifacts = [path.name for path in artifacts.paths]

    # Stage 7: Run log
    if settings.write_run_log:
        try:
            write_run_log(metrics, settings.output_path)
        except OSError as e:
            logger.error(f"Failed to write run log: {e}")

    logger.info(
        f"Pipeline completed. Acquired {metrics.acquired_count} of "
        f"{metrics.listed_count} stories"
    )

    return WorkflowResult(
        artifacts=artifacts,
        stories=stories,
        results=results,
        metrics=metrics,
    )
