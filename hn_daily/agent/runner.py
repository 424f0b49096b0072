"""Runner module for the hn_daily digest.

This module wires together configuration, logging and the workflow, and
turns the outcome into an exit code and a console summary.
"""

import logging
import sys
from dataclasses import replace

from hn_daily.agent.workflow import WorkflowResult, run_pipeline
from hn_daily.config.settings import ConfigurationError, Settings, load_settings
from hn_daily.engines.story_lister import ListingError


# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_LISTING_ERROR = 2
EXIT_PIPELINE_ERROR = 3


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def apply_overrides(
    settings: Settings,
    limit: int | None = None,
    output_dir: str | None = None,
    no_pdf: bool = False,
    normalization: str | None = None,
) -> Settings:
    """Return settings with command line overrides applied and validated.

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    changes: dict[str, object] = {}
    if limit is not None:
        changes["story_limit"] = limit
    if output_dir is not None:
        changes["output_dir"] = output_dir
    if no_pdf:
        changes["pdf_enabled"] = False
    if normalization is not None:
        changes["normalization_policy"] = normalization

    updated = replace(settings, **changes)
    updated.validate()
    return updated


def print_summary(result: WorkflowResult) -> None:
    """Print the generated files to the console."""
    print(f"Files generated in {result.artifacts.html_path.parent}")
    print(f"- {result.artifacts.html_path.name} - HTML digest")
    print(f"- {result.artifacts.text_path.name} - Plain text digest")
    if result.artifacts.pdf_path is not None:
        print(f"- {result.artifacts.pdf_path.name} - PDF digest")


def run(
    limit: int | None = None,
    output_dir: str | None = None,
    no_pdf: bool = False,
    normalization: str | None = None,
    verbose: bool = False,
) -> int:
    """Run the digest pipeline.

    Initializes settings, configures logging, and executes the workflow.

    Args:
        limit: Override for the number of stories
        output_dir: Override for the output directory
        no_pdf: If True, skip the PDF export
        normalization: Override for the plain-text normalization policy
        verbose: If True, enable verbose/debug logging.

    Returns:
        Exit code:
        - 0: Success
        - 1: Configuration error
        - 2: Listing error (nothing written)
        - 3: Unexpected pipeline error
    """
    _setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = apply_overrides(
            load_settings(validate=False),
            limit=limit,
            output_dir=output_dir,
            no_pdf=no_pdf,
            normalization=normalization,
        )
        logger.debug("Configuration loaded successfully")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    try:
        result = run_pipeline(settings)
    except ListingError as e:
        logger.error(f"Could not list top stories, no digest written: {e}")
        return EXIT_LISTING_ERROR
    except Exception as e:
        logger.exception(f"Pipeline failed with unexpected error: {e}")
        return EXIT_PIPELINE_ERROR

    print_summary(result)
    return EXIT_SUCCESS
