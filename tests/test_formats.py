"""Tests for the per-month summary and matrix files.

Covers:
- Exact summary file text, including absent readings
- Summary write -> read at 3-decimal precision, and malformed rows on read
- Matrix shape (always the month's day count), exact-slot placement
"""

from datetime import date, datetime

import pandas as pd
import pytest

from sunnybeamlogic import formats
from sunnybeamlogic.types import DayData, DaySummary, MeasurementRecord

HEADER = "date;total_kwh;first_reading;last_reading;num_measurements"


def _day(d, pairs):
    """pairs: [('HH:MM', value), ...] in file order."""
    records = tuple(
        MeasurementRecord(datetime.combine(d, datetime.strptime(t, "%H:%M").time()), v)
        for t, v in pairs
    )
    return DayData(date=d, records=records)


def test_write_summary_scenario(tmp_path):
    path = tmp_path / "23-11-summary.csv"
    formats.write_summary(
        path,
        [
            DaySummary(
                date=date(2023, 11, 2),
                total_kwh=0.0,
                first_reading=None,
                last_reading=None,
                num_measurements=0,
            ),
            DaySummary(
                date=date(2023, 11, 1),
                total_kwh=3.25,
                first_reading=12.5,
                last_reading=15.75,
                num_measurements=2,
            ),
        ],
    )
    assert path.read_text() == (
        f"{HEADER}\n"
        "2023-11-01;3.250;12.500;15.750;2\n"
        "2023-11-02;0.000;;;0\n"
    )


def test_write_summary_empty_month_is_header_only(tmp_path):
    path = tmp_path / "s.csv"
    formats.write_summary(path, [])
    assert path.read_text().strip() == HEADER


def test_summary_round_trip_at_three_decimals(tmp_path):
    original = [
        DaySummary(date=date(2024, 2, 1), total_kwh=1.23456, first_reading=100.0004,
                   last_reading=101.2346, num_measurements=144),
        DaySummary(date=date(2024, 2, 2), total_kwh=0.0, first_reading=101.5,
                   last_reading=None, num_measurements=1),
        DaySummary(date=date(2024, 2, 29), total_kwh=12.0, first_reading=0.0,
                   last_reading=12.0, num_measurements=3),
    ]
    path = tmp_path / "24-02-summary.csv"
    formats.write_summary(path, original)
    back = formats.read_summary(path)

    def r(x):
        return None if x is None else round(x, 3)

    assert len(back) == len(original)
    for a, b in zip(original, back):
        assert b.date == a.date
        assert b.total_kwh == r(a.total_kwh)
        assert b.first_reading == r(a.first_reading)
        assert b.last_reading == r(a.last_reading)
        assert b.num_measurements == a.num_measurements


def test_read_summary_skips_malformed_rows(tmp_path):
    path = tmp_path / "s.csv"
    path.write_text(
        f"{HEADER}\n"
        "2023-11-01;3.250;12.500;15.750;2\n"
        "2023-11-xx;1.000;1.000;2.000;2\n"
        "2023-11-03;abc;1.000;2.000;2\n"
        "2023-11-04;1.000;one;2.000;2\n"
        "2023-11-05;1.000;1.000;2.000;2.5\n"
        "2023-11-06;1.000;1.000;2.000;2;extra\n"
        "2023-11-07;1.000\n"
        "2023-11-09;inf;1.000;2.000;2\n"
        "2023-11-10;1.000;-inf;2.000;2\n"
        "2023-11-11;1.000;1.000;nan;2\n"
        "\n"
        "2023-11-08;0.500;;;0\n"
    )
    rows = formats.read_summary(path)
    assert [r.date for r in rows] == [date(2023, 11, 1), date(2023, 11, 8)]
    assert rows[1].first_reading is None and rows[1].last_reading is None


@pytest.mark.parametrize(
    "content",
    [
        "",
        f"{HEADER}\n",
        "a;b;c;d;e\n2023-11-01;3.250;12.500;15.750;2\n",
        f"{HEADER}\n2023-11-xx;1;1;1;1\n",
    ],
)
def test_read_summary_unusable_file_is_none(tmp_path, content):
    path = tmp_path / "s.csv"
    path.write_text(content)
    assert formats.read_summary(path) is None


def test_read_summary_missing_file_is_none(tmp_path):
    assert formats.read_summary(tmp_path / "nope.csv") is None


def test_slot_labels():
    labels = formats.slot_labels()
    assert len(labels) == 144
    assert labels[0] == "00:00"
    assert labels[7] == "01:10"
    assert labels[-1] == "23:50"


@pytest.mark.parametrize(
    "year, month, width",
    [(2023, 11, 30), (2024, 2, 29), (2023, 2, 28), (2024, 1, 31)],
)
def test_matrix_width_is_day_count_of_month(year, month, width):
    d = date(year, month, 5)
    m = formats.build_matrix(year, month, {d: _day(d, [("00:00", 1.0)])})
    assert m.shape == (144, width)
    assert m.index.name == "Uhrzeit"
    assert m.columns[0] == f"01.{month:02d}.{year}"


def test_matrix_places_only_exact_slots():
    d = date(2023, 11, 2)
    day = _day(
        d,
        [
            ("00:00", 12.5),
            ("00:05", 12.6),  # off-grid
            ("00:10", None),
            ("00:20", 12.8),
            ("00:20", 12.9),  # later row wins
            ("23:50", 15.75),
        ],
    )
    m = formats.build_matrix(2023, 11, {d: day})
    col = m["02.11.2023"]
    assert col["00:00"] == 12.5
    assert pd.isna(col["00:10"])
    assert col["00:20"] == 12.9
    assert col["23:50"] == 15.75
    assert col.notna().sum() == 3
    assert "00:05" not in m.index
    # days without input are present but empty
    assert m["01.11.2023"].isna().all()


def test_write_matrix_text(tmp_path):
    d = date(2023, 11, 1)
    path = tmp_path / "23_11.csv"
    formats.write_matrix(path, 2023, 11, {d: _day(d, [("00:00", 12.5), ("23:50", 15.75)])})
    lines = path.read_text().split("\n")
    assert lines[-1] == ""
    lines = lines[:-1]
    assert len(lines) == 145
    header = lines[0].split("\t")
    assert header[0] == "Uhrzeit"
    assert header[1:3] == ["01.11.2023", "02.11.2023"]
    assert len(header) == 31
    first = lines[1].split("\t")
    assert first[0] == "00:00"
    assert first[1] == "12.500"
    assert first[2:] == [""] * 29
    assert lines[-1].split("\t")[:2] == ["23:50", "15.750"]
    assert lines[2] == "00:10" + "\t" * 30
