"""Timestamp formatting utilities."""

from datetime import date, datetime

# English month names, independent of the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def now() -> str:
    """Current local time as a sortable directory-safe stamp (e.g., 20261019_143005)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """Current local date as YYYY-MM-DD."""
    return datetime.now().strftime("%Y-%m-%d")


def format_long_date(value: date) -> str:
    """
    Format a date as "Month D, YYYY" (e.g., "October 19, 2026").

    Uses a fixed English month table so output does not depend on locale settings.
    """
    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def long_date_today() -> str:
    """Today's date in long form, read from the system clock."""
    return format_long_date(datetime.now())
