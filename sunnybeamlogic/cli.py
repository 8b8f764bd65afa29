"""Command-line entry point: ``sunnybeamlogic --data-dir=./data [--force] [--verbose]``."""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__, aggregate, canon
from .config import load_config
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

EPILOG = """\
The data directory may hold daily files in either layout:
  - data/YY-MM-DD.csv         (e.g., data/23-11-01.csv)
  - data/YY-MM/YY-MM-DD.csv   (e.g., data/23-11/23-11-01.csv)
"""


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sunnybeamlogic",
        description="SunnyBeam solar data aggregator",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data-dir",
        default=canon.DEFAULT_DATA_DIR,
        help="Path to the data directory (default: ./data)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Force regeneration of all monthly files",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for dashboard-data.json (default: <data-dir>/../output)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(
            args.data_dir,
            force=args.force,
            verbose=args.verbose,
            output_dir=args.output_dir,
        )
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    logger.info("SunnyBeam Solar Data Aggregator v%s", __version__)
    logger.info("Data directory: %s", config.data_dir.resolve())
    logger.info("Force regeneration: %s", config.force)

    try:
        report = aggregate.run(
            config.data_dir, force=config.force, dashboard_dir=config.dashboard_dir
        )
    except Exception:
        logger.exception("Error during processing")
        return 1

    logger.info(
        "Processing complete: %d processed, %d up-to-date, %d omitted",
        len(report.processed),
        len(report.skipped),
        len(report.omitted),
    )
    if report.dashboard_path is not None:
        logger.info("Monthly files saved to: %s", config.data_dir.resolve())
        logger.info("Dashboard data saved to: %s", report.dashboard_path.resolve())
    return 0


if __name__ == "__main__":
    sys.exit(main())
