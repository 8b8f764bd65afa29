from __future__ import annotations
from typing import Final

# SunnyBeam daily export
ENCODING: Final[str] = "latin-1"
DATA_SENTINEL: Final[str] = "DD.MM.YYYY HH:mm"
DAILY_DELIMITER: Final[str] = ";"
DAILY_TIMESTAMP_FORMAT: Final[str] = "%d.%m.%Y %H:%M"
DAILY_TIMESTAMP_SHAPE: Final[str] = "99.99.9999 99:99"  # 9 = ASCII digit
DECIMAL_COMMA: Final[str] = ","
CENTURY: Final[int] = 2000  # two-digit years are taken as 20YY, no pivot

# Matrix grid
SLOT_MINUTES: Final[int] = 10
SLOTS_PER_DAY: Final[int] = 24 * 60 // SLOT_MINUTES  # 144
MATRIX_DELIMITER: Final[str] = "\t"
MATRIX_TIME_LABEL: Final[str] = "Uhrzeit"
MATRIX_DATE_FORMAT: Final[str] = "%d.%m.%Y"

# Summary file
SUMMARY_DELIMITER: Final[str] = ";"
SUMMARY_COLS: Final[list[str]] = [
    "date",
    "total_kwh",
    "first_reading",
    "last_reading",
    "num_measurements",
]
FLOAT_FORMAT: Final[str] = "%.3f"

# Dashboard rollup
DASHBOARD_FILE: Final[str] = "dashboard-data.json"
DEFAULT_DATA_DIR: Final[str] = "./data"

MONTH_NAMES: Final[tuple[str, ...]] = (
    "Januar",
    "Februar",
    "März",
    "April",
    "Mai",
    "Juni",
    "Juli",
    "August",
    "September",
    "Oktober",
    "November",
    "Dezember",
)
