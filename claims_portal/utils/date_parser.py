"""Date helpers for policy tenure and holder documents."""

from __future__ import annotations

import calendar
from datetime import date, datetime

# Reasonable bounds for policy and claim dates
MIN_VALID_YEAR = 1900
MAX_VALID_YEAR = 2100

_DATE_FORMATS = (
    "%Y-%m-%d",  # ISO 8601
    "%d/%m/%Y",  # Indian day-first format
    "%Y%m%d",  # Compact
)


def parse_flexible_date(value: str | date | None) -> date | None:
    """Parse a calendar date from the formats holder documents arrive in.

    Supports ISO 8601 (``2021-01-01``), day-first (``01/01/2021``) and
    compact (``20210101``) strings, and full ISO timestamps
    (``2021-01-01T10:00:00Z``), from which only the date part is kept.
    ``date`` and ``datetime`` values pass through as dates.

    Returns None for empty input, unparseable strings, impossible dates
    (Feb 30) and years outside 1900-2100.

    Examples:
        >>> parse_flexible_date("2021-01-01")
        datetime.date(2021, 1, 1)
        >>> parse_flexible_date("15/08/2022")
        datetime.date(2022, 8, 15)
        >>> parse_flexible_date("2024-02-30") is None
        True
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    candidates = [text]
    if "T" in text:
        candidates.append(text.split("T", 1)[0])

    for candidate in candidates:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
            if parsed.year < MIN_VALID_YEAR or parsed.year > MAX_VALID_YEAR:
                continue
            return parsed

    return None


def _is_last_day_of_month(value: date) -> bool:
    return value.day == calendar.monthrange(value.year, value.month)[1]


def whole_months_between(start: date, end: date | datetime) -> int:
    """Count the full calendar months elapsed from ``start`` to ``end``.

    A month only counts once the day of month has been reached again, so
    2023-01-15 -> 2023-02-14 is 0 months and 2023-01-15 -> 2023-02-15 is 1.
    When ``end`` falls on the last day of a shorter month the month is
    complete (2023-01-31 -> 2023-02-28 is 1). A start date after ``end``
    yields a negative count.
    """
    if isinstance(end, datetime):
        end = end.date()
    if start > end:
        return -whole_months_between(end, start)

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day and not _is_last_day_of_month(end):
        months -= 1
    return months
