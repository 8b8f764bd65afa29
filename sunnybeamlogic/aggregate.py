"""
Month-by-month control flow: decide staleness, parse, summarise, export.

A month is regenerated when one of its two output files is missing, or when
any of its daily files is newer than the *older* of the two outputs. Using
the older output as baseline means a run that died between writing the
summary and the matrix is never mistaken for an up-to-date month.
"""

from __future__ import annotations
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from . import filenames, formats, ingest, summary
from .dashboard import export_dashboard
from .scan import MonthKey, scan_and_group_by_month
from .types import DayData, MonthResult, MonthSummary, RunReport

logger = logging.getLogger(__name__)


def output_paths(data_dir: Path, year: int, month: int) -> tuple[Path, Path]:
    """(summary file, matrix file) for a month."""
    data_dir = Path(data_dir)
    return (
        data_dir / filenames.summary_file_name(year, month),
        data_dir / filenames.matrix_file_name(year, month),
    )


def should_process_month(
    data_dir: Path, year: int, month: int, daily_files: Sequence[Path]
) -> bool:
    summary_path, matrix_path = output_paths(data_dir, year, month)
    if not summary_path.exists() or not matrix_path.exists():
        logger.debug("Output files missing, processing required")
        return True

    baseline = min(summary_path.stat().st_mtime_ns, matrix_path.stat().st_mtime_ns)
    newer = [p for p in daily_files if Path(p).stat().st_mtime_ns > baseline]
    if newer:
        logger.debug("Found %d daily file(s) newer than output files", len(newer))
        return True
    return False


def process_month(year: int, month: int, daily_files: Sequence[Path]) -> MonthResult:
    """Parse every daily file of the month; files without usable data are left out."""
    days: dict[date, DayData] = {}
    for path in daily_files:
        path = Path(path)
        day_date = filenames.parse_date(path.name)
        if day_date is None:
            continue
        day = ingest.read_daily_file(path, day_date)
        if day is None:
            continue
        if day_date in days:
            logger.debug("  %s replaces an earlier file for %s", path, day_date)
        days[day_date] = day
        logger.debug("  Parsed %s: %d measurements", path.name, day.measurement_count())

    return MonthResult(
        summary=summary.summarise_month(year, month, days),
        days=dict(sorted(days.items())),
    )


def export_month(data_dir: Path, result: MonthResult) -> None:
    """Write the summary file and the full matrix for a processed month."""
    s = result.summary
    summary_path, matrix_path = output_paths(data_dir, s.year, s.month)

    formats.write_summary(summary_path, s.days)
    logger.debug("  Exported summary to %s", summary_path.name)

    formats.write_matrix(matrix_path, s.year, s.month, result.days)
    logger.debug("  Exported matrix to %s", matrix_path.name)


def load_existing_summary(data_dir: Path, year: int, month: int) -> Optional[MonthSummary]:
    """Rebuild a skipped month's summary from its exported summary file."""
    summary_path, _ = output_paths(data_dir, year, month)
    rows = formats.read_summary(summary_path)
    if rows is None:
        return None
    return summary.month_from_days(year, month, rows)


def run(
    data_dir: Path,
    *,
    force: bool = False,
    dashboard_dir: Optional[Path] = None,
) -> RunReport:
    """
    Process every month found under data_dir, then write the dashboard rollup.

    Months are handled in ascending order. The rollup holds every month that
    was processed now or could be reloaded from its summary file; a month that
    is neither is omitted from this run's rollup.
    """
    data_dir = Path(data_dir)
    logger.info("Scanning for daily CSV files...")
    groups = scan_and_group_by_month(data_dir)

    if not groups:
        logger.warning("No CSV files found in %s", data_dir.resolve())
        logger.info("Expected layouts:")
        logger.info("  - data/YY-MM-DD.csv (e.g., data/23-11-01.csv)")
        logger.info("  - data/YY-MM/YY-MM-DD.csv (e.g., data/23-11/23-11-01.csv)")
        return RunReport(months=[], processed=[], skipped=[], omitted=[])

    logger.info("Found %d month(s) with data", len(groups))

    months: list[MonthSummary] = []
    processed: list[MonthKey] = []
    skipped: list[MonthKey] = []
    omitted: list[MonthKey] = []

    for (year, month), files in groups.items():
        logger.info("Processing %d-%02d...", year, month)

        if force:
            logger.info("  Force mode: regenerating all files")
        if force or should_process_month(data_dir, year, month, files):
            result = process_month(year, month, files)
            export_month(data_dir, result)
            months.append(result.summary)
            processed.append((year, month))
            logger.info("  Month processed successfully")
            continue

        existing = load_existing_summary(data_dir, year, month)
        if existing is None:
            omitted.append((year, month))
            logger.warning("  Up-to-date but summary could not be reloaded; left out of dashboard")
        else:
            months.append(existing)
            skipped.append((year, month))
            logger.info("  Skipped (already up-to-date)")

    logger.info("Generating dashboard data...")
    target_dir = dashboard_dir if dashboard_dir is not None else data_dir.resolve().parent / "output"
    dashboard_path = export_dashboard(target_dir, months)

    return RunReport(
        months=months,
        processed=processed,
        skipped=skipped,
        omitted=omitted,
        dashboard_path=dashboard_path,
    )
