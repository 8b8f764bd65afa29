from datetime import date
from pathlib import Path

import pytest

HEADER = [
    "sep=;",
    "Version CSV1|Tool SunnyBeam11|Linebreaks CR/LF|Delimiter semicolon|Decimalpoint comma|Precision 3",
    "",
    ";SN: 2100123456",
    ";SB 3000TL-20",
    ";2100123456",
    ";E-Total",
    ";Zählerstand",
    "DD.MM.YYYY HH:mm;kWh",
]


def daily_text(rows):
    """A SunnyBeam daily export (CRLF, metadata header, sentinel) around rows."""
    return "\r\n".join(HEADER + list(rows)) + "\r\n"


def kwh(value: float) -> str:
    return f"{value:.3f}".replace(".", ",")


def day_rows(d: date, start: float = 100.0, step: float = 0.1, every: int = 10):
    """On-grid rows from 00:00 to 23:50 with a steadily rising counter."""
    rows = []
    for i, minute in enumerate(range(0, 24 * 60, every)):
        stamp = f"{d:%d.%m.%Y} {minute // 60:02d}:{minute % 60:02d}"
        rows.append(f"{stamp};{kwh(start + i * step)}")
    return rows


@pytest.fixture
def write_daily():
    def _write(path: Path, rows) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(daily_text(rows).encode("latin-1"))
        return path

    return _write


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture
def scenario_rows():
    # 23-11-01.csv: counter 12.5 at midnight, 15.75 at 23:50
    return ["01.11.2023 00:00;12,500", "01.11.2023 23:50;15,750"]


@pytest.fixture
def november(data_dir, write_daily, scenario_rows):
    """Flat layout with three November 2023 days, one of them empty."""
    write_daily(data_dir / "23-11-01.csv", scenario_rows)
    write_daily(data_dir / "23-11-02.csv", day_rows(date(2023, 11, 2), start=15.75))
    write_daily(data_dir / "23-11-03.csv", [])
    return data_dir
