"""Observability and run metrics for the digest pipeline.

This module provides data structures and functions for tracking how many
stories made it through each stage, logging stage counts, and writing an
optional JSON run log.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from hn_daily.engines.content_acquirer import AcquisitionResult
from hn_daily.engines.story_lister import Story


logger = logging.getLogger(__name__)


@dataclass
class RunMetrics:
    """Metrics collected during a pipeline run.

    Attributes:
        listed_count: Number of stories listed
        acquired_count: Stories whose content was acquired
        unavailable_count: Stories whose content is unavailable (includes skipped)
        skipped_count: Stories without an external link (no request made)
        paywalled_count: Acquired stories flagged by the paywall heuristic
        artifacts: File names of the generated digest files
        pdf_status: Status of the PDF export ("success", "failed", "skipped", "pending")
        errors: Per-story failure messages
        run_timestamp: Timestamp when the run started
    """
    listed_count: int = 0
    acquired_count: int = 0
    unavailable_count: int = 0
    skipped_count: int = 0
    paywalled_count: int = 0
    artifacts: list[str] = field(default_factory=list)
    pdf_status: str = "pending"
    errors: list[str] = field(default_factory=list)
    run_timestamp: datetime = field(default_factory=datetime.now)


def create_run_metrics(
    listed_count: int = 0,
    acquired_count: int = 0,
    unavailable_count: int = 0,
    skipped_count: int = 0,
    paywalled_count: int = 0,
    artifacts: list[str] | None = None,
    pdf_status: str = "pending",
    errors: list[str] | None = None,
    run_timestamp: datetime | None = None,
) -> RunMetrics:
    """Create a RunMetrics instance with proper defaults for optional fields.

    Example:
        >>> metrics = create_run_metrics(listed_count=30, acquired_count=24)
        >>> metrics.unavailable_count
        0
    """
    return RunMetrics(
        listed_count=listed_count,
        acquired_count=acquired_count,
        unavailable_count=unavailable_count,
        skipped_count=skipped_count,
        paywalled_count=paywalled_count,
        artifacts=artifacts or [],
        pdf_status=pdf_status,
        errors=errors or [],
        run_timestamp=run_timestamp or datetime.now(),
    )


def summarize_results(
    stories: Sequence[Story],
    results: Sequence[AcquisitionResult],
    run_timestamp: datetime | None = None,
) -> RunMetrics:
    """Count acquisition outcomes into a RunMetrics instance.

    Failures of linked stories are recorded in ``errors`` as
    "<url>: <reason>"; linkless stories are only counted as skipped.

    Args:
        stories: Listed stories
        results: Acquisition results, positionally aligned with `stories`
        run_timestamp: When the run started (defaults to now)

    Returns:
        RunMetrics with the story counts filled in
    """
    errors: list[str] = []
    acquired = paywalled = skipped = 0

    for story, result in zip(stories, results):
        if result.content is not None:
            acquired += 1
            if result.content.is_paywalled:
                paywalled += 1
        elif result.skipped:
            skipped += 1
        else:
            errors.append(f"{story.url}: {result.reason}")

    return create_run_metrics(
        listed_count=len(stories),
        acquired_count=acquired,
        unavailable_count=len(results) - acquired,
        skipped_count=skipped,
        paywalled_count=paywalled,
        errors=errors,
        run_timestamp=run_timestamp,
    )


def write_run_log(metrics: RunMetrics, output_dir: str | Path) -> str:
    """Write run metrics to a JSON log file.

    Creates a JSON file in the specified output directory with filename format:
    run_log_YYYYMMDD_HHMMSS.json

    Args:
        metrics: RunMetrics instance to write
        output_dir: Directory path for output file

    Returns:
        The filepath of the written JSON file

    Raises:
        OSError: If the output directory cannot be created or file cannot be written
    """
    output_path = Path(output_dir).expanduser()
    output_path.mkdir(parents=True, exist_ok=True)

    timestamp = metrics.run_timestamp.strftime('%Y%m%d_%H%M%S')
    filepath = output_path / f"run_log_{timestamp}.json"

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(_metrics_to_dict(metrics), f, indent=2, ensure_ascii=False)

    logger.info(f"Run log written to {filepath}")
    return str(filepath)


def _metrics_to_dict(metrics: RunMetrics) -> dict[str, Any]:
    return {
        "listed_count": metrics.listed_count,
        "acquired_count": metrics.acquired_count,
        "unavailable_count": metrics.unavailable_count,
        "skipped_count": metrics.skipped_count,
        "paywalled_count": metrics.paywalled_count,
        "artifacts": metrics.artifacts,
        "pdf_status": metrics.pdf_status,
        "errors": metrics.errors,
        "run_timestamp": metrics.run_timestamp.isoformat(),
    }


def log_stage_counts(stage: str, count: int) -> None:
    """Log the count for a pipeline stage.

    Example:
        >>> log_stage_counts("acquired", 24)
        # Logs: "Pipeline stage 'acquired': 24 stories"
    """
    logger.info(f"Pipeline stage '{stage}': {count} stories")
