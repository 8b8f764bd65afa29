"""
Per-month output files.

Summary file (``YY-MM-summary.csv``), one row per day with data::

    date;total_kwh;first_reading;last_reading;num_measurements
    2023-11-01;3.250;12.500;15.750;2

Matrix file (``YY_MM.csv``), tab separated, 144 ten-minute rows by every
calendar day of the month::

    Uhrzeit  01.11.2023  02.11.2023  ...
    00:00    12.500                  ...

A matrix cell is filled only by a record whose wall-clock time is exactly the
slot time. Off-grid readings still count in the summary but never appear in
the matrix, so every month's grid keeps the same shape.
"""

from __future__ import annotations
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from . import canon, filenames
from .types import DayData, DaySummary

logger = logging.getLogger(__name__)


def _optional(x) -> Optional[float]:
    return None if pd.isna(x) else float(x)


def summary_frame(summaries: Iterable[DaySummary]) -> pd.DataFrame:
    ordered = sorted(summaries, key=lambda s: s.date)
    return pd.DataFrame(
        {
            "date": pd.Series([s.date.isoformat() for s in ordered], dtype=object),
            "total_kwh": pd.Series([s.total_kwh for s in ordered], dtype=float),
            "first_reading": pd.Series([s.first_reading for s in ordered], dtype=float),
            "last_reading": pd.Series([s.last_reading for s in ordered], dtype=float),
            "num_measurements": pd.Series(
                [s.num_measurements for s in ordered], dtype=int
            ),
        },
        columns=canon.SUMMARY_COLS,
    )


def write_summary(path: Path, summaries: Iterable[DaySummary]) -> None:
    summary_frame(summaries).to_csv(
        path,
        sep=canon.SUMMARY_DELIMITER,
        index=False,
        float_format=canon.FLOAT_FORMAT,
        na_rep="",
        lineterminator="\n",
        encoding="utf-8",
    )


def read_summary(path: Path) -> Optional[list[DaySummary]]:
    """
    Read a summary file back into DaySummary rows.

    Rows that do not parse are logged and dropped. Returns None when the file
    is missing, unreadable, has the wrong header, or has no valid row left.
    """
    path = Path(path)
    if not path.is_file():
        return None

    overlong: list[list[str]] = []

    def _bad_line(fields: list[str]) -> None:
        overlong.append(fields)
        return None

    try:
        raw = pd.read_csv(
            path,
            sep=canon.SUMMARY_DELIMITER,
            dtype=str,
            keep_default_na=False,
            engine="python",
            on_bad_lines=_bad_line,
            encoding="utf-8",
        )
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Could not read %s: %s", path.name, e)
        return None

    for fields in overlong:
        logger.debug("Skipping summary row with %d fields in %s: %s", len(fields), path.name, fields)

    if [str(c).strip() for c in raw.columns] != canon.SUMMARY_COLS:
        logger.warning("Unexpected header in %s: %s", path.name, list(raw.columns))
        return None
    if raw.empty:
        logger.warning("No data rows in %s", path.name)
        return None

    raw = raw.fillna("").apply(lambda col: col.str.strip())
    days = pd.to_datetime(raw["date"], format="%Y-%m-%d", errors="coerce")
    total = pd.to_numeric(raw["total_kwh"], errors="coerce")
    first = pd.to_numeric(raw["first_reading"], errors="coerce")
    last = pd.to_numeric(raw["last_reading"], errors="coerce")
    count = pd.to_numeric(raw["num_measurements"], errors="coerce")

    bad = (
        days.isna()
        | ~np.isfinite(total)
        | count.isna()
        | (count % 1 != 0)
        | (raw["first_reading"].ne("") & ~np.isfinite(first))
        | (raw["last_reading"].ne("") & ~np.isfinite(last))
    )
    for line in raw.loc[bad].itertuples(index=False):
        logger.debug("Skipping malformed summary row in %s: %s", path.name, ";".join(line))

    keep = ~bad
    if not keep.any():
        logger.warning("No usable rows in %s", path.name)
        return None

    return [
        DaySummary(
            date=d.date(),
            total_kwh=float(t),
            first_reading=_optional(f),
            last_reading=_optional(la),
            num_measurements=int(n),
        )
        for d, t, f, la, n in zip(
            days[keep], total[keep], first[keep], last[keep], count[keep]
        )
    ]


def slot_labels() -> list[str]:
    """'00:00', '00:10', ... '23:50'."""
    minutes = (s * canon.SLOT_MINUTES for s in range(canon.SLOTS_PER_DAY))
    return [f"{m // 60:02d}:{m % 60:02d}" for m in minutes]


def build_matrix(year: int, month: int, days: Mapping[date, DayData]) -> pd.DataFrame:
    """
    Slot-by-day grid of raw readings for one month.

    Index: slot labels (named 'Uhrzeit'); one float column per calendar day
    labelled dd.mm.yyyy, NaN where no on-slot reading exists. When several
    records share a slot the later one in the file wins.
    """
    slots = pd.Index(slot_labels(), name=canon.MATRIX_TIME_LABEL)
    columns: dict[str, pd.Series] = {}
    for d in filenames.month_dates(year, month):
        day = days.get(d)
        if day is None:
            col = pd.Series(np.nan, index=slots, dtype=float)
        else:
            frame = day.to_frame().drop_duplicates("slot", keep="last")
            col = frame.set_index("slot")["kwh"].reindex(slots)
        columns[d.strftime(canon.MATRIX_DATE_FORMAT)] = col
    out = pd.DataFrame(columns, index=slots)
    out.index.name = canon.MATRIX_TIME_LABEL
    return out


def write_matrix(path: Path, year: int, month: int, days: Mapping[date, DayData]) -> None:
    build_matrix(year, month, days).to_csv(
        path,
        sep=canon.MATRIX_DELIMITER,
        float_format=canon.FLOAT_FORMAT,
        na_rep="",
        lineterminator="\n",
        encoding="utf-8",
    )
