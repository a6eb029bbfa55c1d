"""
Formatting utilities for DSF Performance display
Indonesian conventions: '.' thousands separator, no decimals for rupiah
"""
import pandas as pd
from datetime import datetime, date
from zoneinfo import ZoneInfo
from typing import Union, Optional
import logging

logger = logging.getLogger(__name__)

_MONTHS_ID = ["Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
              "Jul", "Agu", "Sep", "Okt", "Nov", "Des"]


def _group_thousands(value: int) -> str:
    return f"{value:,}".replace(",", ".")


def format_idr(value: Union[int, float, None]) -> str:
    """
    Format rupiah amount

    Args:
        value: Amount in IDR

    Returns:
        e.g. "Rp 7.500.000"
    """
    try:
        if value is None or pd.isna(value):
            return "-"

        amount = int(round(float(value)))
        sign = "-" if amount < 0 else ""
        return f"{sign}Rp {_group_thousands(abs(amount))}"

    except (ValueError, TypeError):
        return "-"


def format_number(value: Union[int, float, None], decimals: int = 0) -> str:
    """
    Format number with '.' thousand separator

    Args:
        value: Number to format
        decimals: Number of decimal places

    Returns:
        Formatted string
    """
    try:
        if value is None or pd.isna(value):
            return "-"

        if decimals == 0:
            return _group_thousands(int(round(float(value))))

        whole, frac = f"{float(value):,.{decimals}f}".split(".")
        return f"{whole.replace(',', '.')},{frac}"

    except (ValueError, TypeError):
        return "-"


def format_percentage(value: Union[int, float, None], decimals: int = 1) -> str:
    """
    Format percentage value

    Args:
        value: Percentage value (0-100, may exceed 100)
        decimals: Number of decimal places
    """
    try:
        if value is None or pd.isna(value):
            return "-"

        return f"{float(value):.{decimals}f}%"

    except (ValueError, TypeError):
        return "-"


def _parse_date(value: Union[str, datetime, date, None]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    for fmt in ("%Y-%m-%d", "%Y%m%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def format_month_year(value: Union[str, datetime, date, None]) -> str:
    """'2026-02-15' -> 'Feb 2026'. '-' when empty or unparsable."""
    d = _parse_date(value)
    if d is None:
        return "-"
    return f"{_MONTHS_ID[d.month - 1]} {d.year}"


def format_full_date(value: Union[str, datetime, date, None]) -> str:
    """'2026-02-15' -> '15 Feb 2026'. '-' when empty or unparsable."""
    d = _parse_date(value)
    if d is None:
        return "-"
    return f"{d.day:02d} {_MONTHS_ID[d.month - 1]} {d.year}"


def format_timestamp(value: Optional[datetime], tz_name: str = "Asia/Jakarta") -> str:
    """
    Format a load timestamp in the given timezone

    Naive values are taken as local time.

    Returns:
        e.g. "15 Feb 2026 17:30 WIB", '-' when empty
    """
    if value is None:
        return "-"
    local = value.astimezone(ZoneInfo(tz_name))
    return f"{format_full_date(local)} {local:%H:%M} {local.tzname()}"
