"""Date handling for AAMVA records.

Two rules with intentionally different strictness:

- ``is_valid_date`` gates validation: ``MM/DD/YYYY`` (``/`` or ``-``), real
  calendar dates only, years in ``[1900, current_year + 100]``.
- ``normalize_date`` produces the 8-digit ``MMDDYYYY`` element value and expands
  2-digit years by prefixing ``20`` with no windowing.

A 2-digit year therefore fails validation but still normalizes; callers are
expected to validate before encoding.
"""

from __future__ import annotations

from datetime import date

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
MIN_YEAR = 1900
MAX_YEARS_AHEAD = 100


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.replace("-", "/").split("/")]


def _is_digits(part: str) -> bool:
    # ASCII only; str.isdigit also accepts other scripts' digits
    return part.isascii() and part.isdigit()


def is_leap_year(year: int) -> bool:
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_month(month: int, year: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def is_valid_date(value: str, current_year: int | None = None) -> bool:
    """Check an ``MM/DD/YYYY`` (or ``MM-DD-YYYY``) date string."""
    if not value:
        return False
    parts = _split(value)
    if len(parts) != 3:
        return False
    if not all(_is_digits(part) for part in parts):
        return False
    month, day, year = (int(part) for part in parts)
    if not 1 <= month <= 12:
        return False
    if not 1 <= day <= days_in_month(month, year):
        return False
    if current_year is None:
        current_year = date.today().year
    return MIN_YEAR <= year <= current_year + MAX_YEARS_AHEAD


def normalize_date(value: str) -> str:
    """Convert ``M/D/YY[YY]`` to ``MMDDYYYY``; return ``""`` when it has no 3 parts."""
    if not value:
        return ""
    parts = _split(value)
    if len(parts) != 3:
        return ""
    month, day, year = parts
    if len(year) == 2:
        year = f"20{year}"
    return f"{month.rjust(2, '0')}{day.rjust(2, '0')}{year}"
