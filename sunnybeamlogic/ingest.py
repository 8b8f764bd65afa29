from __future__ import annotations
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from . import canon, filenames
from .exceptions import IngestError, require
from .types import DayData, LineOutcome, MeasurementRecord

logger = logging.getLogger(__name__)

# Lines dropped without complaint: they are not data rows at all.
SILENT_REASONS = frozenset({"too few fields", "missing timestamp"})
DIGITS = list("0123456789")


def _data_lines(lines: Iterable[str]) -> list[tuple[int, str]]:
    """Return (line_no, text) for every non-blank line after the sentinel header."""
    started = False
    out: list[tuple[int, str]] = []
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        if line.startswith(canon.DATA_SENTINEL):
            started = True
            continue
        if started:
            out.append((line_no, line))
    return out


def _fixed_shape(s: pd.Series, shape: str) -> pd.Series:
    """Positional match against shape: '9' is an ASCII digit, any other char is literal."""
    ok = s.str.len() == len(shape)
    for i, ch in enumerate(shape):
        c = s.str[i]
        ok &= c.isin(DIGITS) if ch == "9" else c.eq(ch)
    return ok


def parse_lines(lines: Iterable[str]) -> list[LineOutcome]:
    """
    Parse the lines of a daily export into one outcome per data-section line.

    Each data row is '<dd.mm.yyyy HH:MM>;<value>[;...]' with a decimal comma.
    An empty value is a record without a reading. Malformed rows come back
    as skipped outcomes carrying a reason; nothing here raises for bad input.
    """
    rows = _data_lines(lines)
    if not rows:
        return []

    frame = pd.DataFrame(rows, columns=["line_no", "text"])
    fields = frame["text"].str.split(canon.DAILY_DELIMITER)
    n_fields = fields.str.len()
    stamp_raw = fields.str[0].fillna("").str.strip()
    value_raw = fields.str[1].fillna("").str.strip()

    stamps = pd.to_datetime(
        stamp_raw, format=canon.DAILY_TIMESTAMP_FORMAT, errors="coerce"
    )
    values = pd.to_numeric(
        value_raw.str.replace(canon.DECIMAL_COMMA, ".", regex=False), errors="coerce"
    ).astype(float)
    has_value = value_raw != ""

    reason = np.select(
        [
            n_fields < 2,
            stamp_raw == "",
            ~_fixed_shape(stamp_raw, canon.DAILY_TIMESTAMP_SHAPE) | stamps.isna(),
            has_value & ~np.isfinite(values),
            has_value & (values < 0),
        ],
        [
            "too few fields",
            "missing timestamp",
            "bad timestamp",
            "bad value",
            "negative value",
        ],
        default="",
    )

    outcomes: list[LineOutcome] = []
    for line_no, text, ts, v, present, why in zip(
        frame["line_no"], frame["text"], stamps, values, has_value, reason
    ):
        if why:
            outcomes.append(LineOutcome(int(line_no), text, reason=str(why)))
            continue
        record = MeasurementRecord(
            timestamp=ts.to_pydatetime(),
            value=float(v) if present else None,
        )
        outcomes.append(LineOutcome(int(line_no), text, record=record))
    return outcomes


def parse_daily(
    raw: bytes, expected_date: date, name: str = "<bytes>"
) -> Optional[DayData]:
    """
    Parse the raw bytes of one daily file.

    Returns None when the file yields no records at all; such a day is left
    out of its month rather than reported as a zero-production day.
    """
    text = raw.decode(canon.ENCODING)
    outcomes = parse_lines(text.splitlines())

    malformed = [o for o in outcomes if o.skipped and o.reason not in SILENT_REASONS]
    for o in malformed:
        logger.debug("%s line %d skipped (%s): %s", name, o.line_no, o.reason, o.text)
    if malformed:
        logger.warning("Skipped %d malformed line(s) in %s", len(malformed), name)

    records = tuple(o.record for o in outcomes if o.record is not None)
    if not records:
        logger.warning("No valid records found in %s", name)
        return None

    off_day = sum(1 for r in records if r.timestamp.date() != expected_date)
    if off_day:
        logger.debug("%s: %d record(s) dated outside %s", name, off_day, expected_date)
    logger.debug("Parsed %d records from %s", len(records), name)
    return DayData(date=expected_date, records=records)


def read_daily_file(path: Path, expected_date: Optional[date] = None) -> Optional[DayData]:
    """Read and parse one daily file; an unreadable file is logged and yields None."""
    path = Path(path)
    if expected_date is None:
        expected_date = filenames.parse_date(path.name)
        require(
            expected_date is not None,
            f"Not a daily file name: {path.name}",
            IngestError,
        )
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read %s: %s", path.name, e)
        return None
    return parse_daily(raw, expected_date, name=path.name)
