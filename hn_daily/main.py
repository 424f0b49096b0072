#!/usr/bin/env python3
"""Main entry point for hn_daily.

This module provides the CLI interface for building the daily digest.

Usage:
    python -m hn_daily.main                  # Build today's digest
    python -m hn_daily.main --limit 10       # Only the top 10 stories
    python -m hn_daily.main --no-pdf         # Skip the PDF export
    python -m hn_daily.main -v               # Run with verbose logging
"""

import argparse
import sys

from hn_daily.agent.runner import run
from hn_daily.config.settings import NORMALIZATION_POLICIES


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Command line arguments. If None, uses sys.argv.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="hn-daily",
        description="Build a daily reading digest of the Hacker News front page",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of top stories to include (default: STORY_LIMIT or 30)",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the digest files (default: OUTPUT_DIR or ~/hn_daily)",
    )

    parser.add_argument(
        "--no-pdf",
        action="store_true",
        help="Do not attempt the PDF export even if wkhtmltopdf is installed",
    )

    parser.add_argument(
        "--normalization",
        choices=NORMALIZATION_POLICIES,
        default=None,
        help="Plain-text normalization policy for extracted articles",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging output",
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point for hn_daily.

    Args:
        args: Command line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parsed = parse_args(args)
    return run(
        limit=parsed.limit,
        output_dir=parsed.output_dir,
        no_pdf=parsed.no_pdf,
        normalization=parsed.normalization,
        verbose=parsed.verbose,
    )


if __name__ == "__main__":
    sys.exit(main())
