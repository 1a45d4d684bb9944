"""Generate burn-up reports from a Jira issue-list CSV export.

Usage:
  burnup < export.csv
  burnup --input export.csv --output-dir reports --date 2024-03-01
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from burnup.adapters.ingest.jira_csv import STDIN_SOURCE, open_input
from burnup.container import Container
from burnup.core.config import Settings, load_settings, log_settings
from burnup.core.errors import BurnupError
from burnup.core.logging import clear_current_source, set_current_source, setup_logging

logger = logging.getLogger("burnup.main")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(description="Build burn-up reports from a Jira CSV export")
    parser.add_argument("--input", type=Path, default=None, help="Export to read (default: stdin)")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory the report tree is created under (default: current directory)",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Date stamped into report file names, YYYY-MM-DD (default: today)",
    )
    return parser


def run(
    input_path: Path | None,
    output_dir: Path,
    report_date: date,
    settings: Settings,
) -> int:
    container = Container(settings=settings, base_dir=output_dir)
    set_current_source(str(input_path) if input_path else STDIN_SOURCE)
    try:
        with open_input(input_path, encoding=settings.INPUT_ENCODING) as stream:
            result = container.burnup_service.generate(stream, report_date)
    finally:
        clear_current_source()
    logger.info(
        "Done: %d items, %.2f leaf points, %d warnings",
        result.item_count,
        result.total_points,
        len(result.warnings),
    )
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main entry point with error handling."""
    args = create_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValidationError as exc:
        setup_logging()
        logger.critical("FATAL: Invalid configuration: %s", exc)
        return EXIT_FAILURE
    setup_logging(settings.LOG_LEVEL)
    log_settings(settings)
    try:
        return run(args.input, args.output_dir, args.date or date.today(), settings)
    except BurnupError as exc:
        logger.critical("FATAL: %s", exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


def run_cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run_cli()
