from __future__ import annotations
import logging
from pathlib import Path

from . import filenames
from .exceptions import ScanError, require

logger = logging.getLogger(__name__)

MonthKey = tuple[int, int]


def _month_of(path: Path) -> MonthKey | None:
    if not filenames.is_csv_file(path):
        return None
    d = filenames.parse_date(path.name)
    return (d.year, d.month) if d is not None else None


def scan_and_group_by_month(root: Path) -> dict[MonthKey, list[Path]]:
    """
    Group the daily files under root by (year, month).

    Two layouts are read side by side:
      - root/YY-MM-DD.csv
      - root/YY-MM/YY-MM-DD.csv (a file whose date is not in the folder's
        month is ignored)

    Files within a month are sorted by name, months ascending. A month only
    appears if at least one daily file was found for it.
    """
    root = Path(root)
    require(root.is_dir(), f"Not a directory: {root}", ScanError)

    groups: dict[MonthKey, list[Path]] = {}

    for entry in root.iterdir():
        key = _month_of(entry)
        if key is not None:
            groups.setdefault(key, []).append(entry)
            logger.debug("Found daily file: %s -> %d-%02d", entry.name, *key)

    for folder in root.iterdir():
        if not folder.is_dir():
            continue
        folder_key = filenames.parse_year_month(folder.name)
        if folder_key is None:
            continue
        for entry in folder.iterdir():
            key = _month_of(entry)
            if key is None:
                continue
            if key != folder_key:
                logger.debug("Ignoring %s/%s: not in month %s", folder.name, entry.name, folder.name)
                continue
            groups.setdefault(key, []).append(entry)
            logger.debug("Found daily file: %s/%s -> %d-%02d", folder.name, entry.name, *key)

    return {key: sorted(groups[key], key=lambda p: p.name) for key in sorted(groups)}


class DataScanner:
    """Scanner bound to one data directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def scan(self) -> dict[MonthKey, list[Path]]:
        return scan_and_group_by_month(self.root)
