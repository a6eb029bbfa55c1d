"""Tests for Indonesian display formatting."""

from datetime import date, datetime, timezone

import pytest

from utils.dsf_performance.formatters import (
    format_full_date,
    format_idr,
    format_month_year,
    format_number,
    format_percentage,
    format_timestamp,
)


@pytest.mark.parametrize("value, expected", [
    (7_500_000, "Rp 7.500.000"),
    (0, "Rp 0"),
    (-250_000, "-Rp 250.000"),
    (1234.6, "Rp 1.235"),
    (None, "-"),
    (float("nan"), "-"),
])
def test_format_idr(value, expected):
    assert format_idr(value) == expected


def test_format_number():
    assert format_number(1234567) == "1.234.567"
    assert format_number(1234.5, decimals=1) == "1.234,5"
    assert format_number(None) == "-"


def test_format_percentage():
    assert format_percentage(101.333) == "101.3%"
    assert format_percentage(None) == "-"


def test_format_month_year():
    assert format_month_year("2026-02-15") == "Feb 2026"
    assert format_month_year("20260815") == "Agu 2026"
    assert format_month_year(date(2026, 5, 1)) == "Mei 2026"
    assert format_month_year("") == "-"
    assert format_month_year("not a date") == "-"


def test_format_full_date():
    assert format_full_date("2026-02-05") == "05 Feb 2026"
    assert format_full_date(None) == "-"


def test_format_timestamp():
    stamp = datetime(2026, 2, 15, 10, 30, tzinfo=timezone.utc)
    assert format_timestamp(stamp, "Asia/Jakarta") == "15 Feb 2026 17:30 WIB"
    assert format_timestamp(stamp, "UTC") == "15 Feb 2026 10:30 UTC"
    assert format_timestamp(None) == "-"
