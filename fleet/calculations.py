"""Helper functions for parsing sheet cells and computing service deltas."""

import math
import re
from datetime import date, datetime
from typing import Any, Optional

from dateutil.parser import isoparse

from .errors import InvalidDateError
from .status import Status

_WHITESPACE = re.compile(r"\s+")
_LEADING_YEAR = re.compile(r"\s*(\d+)(?![\d.,eE])")


def parse_number(value: Any) -> float:
    """
    Parse a locale-formatted number cell.

    - Numbers pass through (NaN and infinities become 0)
    - Strings lose all whitespace, commas become decimal points
    - Empty or unparsable values become 0
    """
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    clean = _WHITESPACE.sub("", str(value)).replace(",", ".")
    try:
        parsed = float(clean)
    except ValueError:
        return 0
    return parsed if math.isfinite(parsed) else 0


def parse_year(value: Any) -> Optional[int]:
    """
    Leading whole number of a year cell ('2015', '2015р', '2015 р.').

    Returns None for blank cells and cells that do not start with a whole
    number ('Infinity', '1e999', '2015.5').
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else None
    match = _LEADING_YEAR.match(str(value or ""))
    return int(match.group(1)) if match else None


def parse_odometer(value: Any) -> Optional[float]:
    """
    Parse an odometer cell strictly.

    Whitespace and commas are thousands separators here, not decimals.
    Returns None for blank or unparsable cells so the caller can skip the row.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if math.isfinite(value) else None
    clean = re.sub(r"[\s,]", "", str(value or ""))
    if not clean:
        return None
    try:
        parsed = float(clean)
    except ValueError:
        return None
    return None if math.isnan(parsed) or math.isinf(parsed) else parsed


def _parse_iso(text: str) -> Optional[date]:
    try:
        return isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def _parse_dotted(text: str) -> Optional[date]:
    parts = text.split(".")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None


def _parse_dashed(text: str) -> Optional[date]:
    parts = text.split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None


_DATE_PARSERS = (_parse_iso, _parse_dotted, _parse_dashed)


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date cell, trying ISO, then DD.MM.YYYY, then loose YYYY-M-D.

    Returns None when every format fails.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    for parser in _DATE_PARSERS:
        parsed = parser(text)
        if parsed is not None:
            return parsed
    return None


def normalize_date(value: Any) -> str:
    """ISO date string for parsable cells, the stripped raw text otherwise."""
    parsed = parse_date(value)
    if parsed is not None:
        return parsed.isoformat()
    return str(value or "").strip()


def days_since(reference: date, service_date: Optional[date], raw: str = "") -> int:
    """
    Whole days elapsed between a service date and the reference date.

    Raises InvalidDateError when the service date could not be parsed.
    """
    if service_date is None:
        raise InvalidDateError(raw)
    return (reference - service_date).days


def time_label(days: Optional[int]) -> str:
    """Short elapsed-time label: '1р 2міс', '3міс', '2р' or '12дн'."""
    if days is None:
        return "-"
    if days < 0:
        return f"{days}дн"
    years = days // 365
    months = (days % 365) // 30
    parts = []
    if years > 0:
        parts.append(f"{years}р")
    if months > 0:
        parts.append(f"{months}міс")
    if not parts:
        return f"{days}дн"
    return " ".join(parts)


def check_status(
    value: float,
    warning: float,
    critical: float,
    strict_critical: bool = False,
    strict_warning: bool = False,
) -> Status:
    """
    Determine status by comparing a value to warning/critical thresholds.

    Thresholds are inclusive lower bounds unless the strict flags are set.
    Critical is checked before warning.
    """
    if value > critical or (not strict_critical and value == critical):
        return Status.CRITICAL
    if value > warning or (not strict_warning and value == warning):
        return Status.WARNING
    return Status.GOOD
