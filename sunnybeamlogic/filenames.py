"""
Mapping between SunnyBeam file/folder names and calendar dates.

Names are parsed positionally (fixed width, fixed separators) rather than by
pattern matching. Two-digit years are read as 20YY with no century pivot:
that is the device's export convention, and callers own any century context.
"""

from __future__ import annotations
import calendar
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable, Optional

from . import canon


def _two_digits(s: str) -> Optional[int]:
    if len(s) != 2 or not (s[0].isdigit() and s[1].isdigit()) or not s.isascii():
        return None
    return int(s)


def _stem(filename: str) -> str:
    return filename.rsplit(".", 1)[0] if "." in filename else filename


def _split_fixed(text: str, seps: Iterable[str], parts: int) -> Optional[list[str]]:
    """Split 'AA?BB?CC' where every '?' is one of seps; None if the shape is off."""
    if len(text) != parts * 3 - 1:
        return None
    chunks = []
    for i in range(parts):
        chunks.append(text[i * 3 : i * 3 + 2])
        if i < parts - 1 and text[i * 3 + 2] not in seps:
            return None
    return chunks


def parse_date(filename: str) -> Optional[date]:
    """'23-11-01.csv' -> date(2023, 11, 1); anything else -> None."""
    chunks = _split_fixed(_stem(filename), ("-",), 3)
    if chunks is None:
        return None
    yy, mm, dd = (_two_digits(c) for c in chunks)
    if yy is None or mm is None or dd is None:
        return None
    if not 1 <= mm <= 12:
        return None
    year = canon.CENTURY + yy
    if not 1 <= dd <= days_in_month(year, mm):
        return None
    return date(year, mm, dd)


def parse_year_month(dirname: str) -> Optional[tuple[int, int]]:
    """'23-11' or '23_11' -> (2023, 11); anything else -> None."""
    chunks = _split_fixed(dirname, ("-", "_"), 2)
    if chunks is None:
        return None
    yy, mm = (_two_digits(c) for c in chunks)
    if yy is None or mm is None or not 1 <= mm <= 12:
        return None
    return canon.CENTURY + yy, mm


def _yy_mm(year: int, month: int) -> tuple[str, str]:
    return f"{year % 100:02d}", f"{month:02d}"


def matrix_file_name(year: int, month: int) -> str:
    yy, mm = _yy_mm(year, month)
    return f"{yy}_{mm}.csv"


def summary_file_name(year: int, month: int) -> str:
    yy, mm = _yy_mm(year, month)
    return f"{yy}-{mm}-summary.csv"


def month_label(year: int, month: int) -> str:
    """(2023, 11) -> 'November 2023'. Display only."""
    return f"{canon.MONTH_NAMES[month - 1]} {year}"


def is_csv_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() == ".csv"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_dates(year: int, month: int) -> list[date]:
    first = date(year, month, 1)
    return [first + timedelta(days=i) for i in range(days_in_month(year, month))]
