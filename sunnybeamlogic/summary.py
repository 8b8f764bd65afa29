from __future__ import annotations
from datetime import date
from typing import Iterable, Mapping

from . import filenames
from .types import DayData, DaySummary, MonthSummary


def summarise_day(day: DayData) -> DaySummary:
    return DaySummary(
        date=day.date,
        total_kwh=day.daily_total(),
        first_reading=day.first_reading(),
        last_reading=day.last_reading(),
        num_measurements=day.measurement_count(),
    )


def month_from_days(year: int, month: int, days: Iterable[DaySummary]) -> MonthSummary:
    """Wrap day summaries (sorted by date here) into a MonthSummary."""
    ordered = sorted(days, key=lambda s: s.date)
    return MonthSummary(
        year=year,
        month=month,
        label=filenames.month_label(year, month),
        summary_file=filenames.summary_file_name(year, month),
        matrix_file=filenames.matrix_file_name(year, month),
        days=ordered,
        total_month_kwh=float(sum(s.total_kwh for s in ordered)),
    )


def summarise_month(year: int, month: int, days: Mapping[date, DayData]) -> MonthSummary:
    return month_from_days(year, month, (summarise_day(d) for d in days.values()))
