"""
Input validators shared by the booking and travel tools.
"""

import re
from datetime import datetime

MONTHS = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")
_TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


def is_valid_date(value: str) -> bool:
    """True for a real calendar date written as YYYY-MM-DD."""
    if not value or not _DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def is_valid_airport(code: str) -> bool:
    """True for a three-letter uppercase IATA code."""
    return bool(code) and bool(_CODE_PATTERN.match(code))


def is_valid_currency(code: str) -> bool:
    """True for a three-letter uppercase ISO 4217 code."""
    return bool(code) and bool(_CODE_PATTERN.match(code))


def is_valid_month(month: str) -> bool:
    return bool(month) and month.lower() in MONTHS


def is_valid_time(value: str) -> bool:
    """True for a 24-hour HH:MM time."""
    return bool(value) and bool(_TIME_PATTERN.match(value))
