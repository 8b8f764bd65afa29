from __future__ import annotations
import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class MeasurementRecord:
    """One row of a daily export. ``value`` of None means no reading, not zero."""

    timestamp: dt.datetime
    value: Optional[float]


@dataclass(frozen=True)
class DayData:
    """
    All records of one daily file, in file order.

    Records are not re-sorted: first/last readings follow the order the
    device wrote them, which is what cumulative counter semantics rely on.
    """

    date: dt.date
    records: Tuple[MeasurementRecord, ...]

    def readings(self) -> List[float]:
        return [r.value for r in self.records if r.value is not None]

    def first_reading(self) -> Optional[float]:
        values = self.readings()
        return values[0] if values else None

    def last_reading(self) -> Optional[float]:
        values = self.readings()
        return values[-1] if values else None

    def measurement_count(self) -> int:
        return len(self.readings())

    def daily_total(self) -> float:
        """Counter difference last - first, floored at zero; 0.0 below two readings."""
        values = self.readings()
        if len(values) < 2:
            return 0.0
        return max(values[-1] - values[0], 0.0)

    def to_frame(self) -> pd.DataFrame:
        """
        Records as a frame in file order:
          - timestamp: datetime64
          - slot: 'HH:MM' wall-clock label
          - kwh: float, NaN where no reading
        """
        stamps = pd.to_datetime([r.timestamp for r in self.records])
        return pd.DataFrame(
            {
                "timestamp": stamps,
                "slot": stamps.strftime("%H:%M"),
                "kwh": pd.Series([r.value for r in self.records], dtype=float).to_numpy(),
            }
        )


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class DaySummary(_Frozen):
    """Derived statistics for one day; serialised with camelCase keys."""

    date: dt.date
    total_kwh: float
    first_reading: Optional[float] = None
    last_reading: Optional[float] = None
    num_measurements: int


class MonthSummary(_Frozen):
    year: int
    month: int
    label: str
    summary_file: str
    matrix_file: str
    days: List[DaySummary]
    total_month_kwh: float


class DashboardData(_Frozen):
    """Root of dashboard-data.json."""

    months: List[MonthSummary]
    generated_at: str


@dataclass(frozen=True)
class MonthResult:
    """A freshly processed month: the summary plus the raw days for the matrix."""

    summary: MonthSummary
    days: Dict[dt.date, DayData] = field(default_factory=dict)


@dataclass(frozen=True)
class LineOutcome:
    """Result of one data-section line: either a record or a skip reason."""

    line_no: int
    text: str
    record: Optional[MeasurementRecord] = None
    reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.record is None


@dataclass(frozen=True)
class RunReport:
    months: List[MonthSummary]
    processed: List[Tuple[int, int]]
    skipped: List[Tuple[int, int]]
    omitted: List[Tuple[int, int]]
    dashboard_path: Optional[Path] = None
