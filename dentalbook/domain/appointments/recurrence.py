"""Recurrence fan-out - one booking request into independent occurrence dates"""

import calendar
from datetime import date, timedelta

from ...catalog import MAX_OCCURRENCES, RECURRING_PATTERNS


def add_months(start: date, months: int) -> date:
    """Same day N months later, clamped to the last day of a shorter month"""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def expand_recurrence(start_date: str, pattern: str, occurrences: int) -> list[str]:
    """
    Dates of every occurrence of a recurring appointment, starting with start_date.

    >>> expand_recurrence("2025-01-06", "weekly", 3)
    ['2025-01-06', '2025-01-13', '2025-01-20']
    """
    if pattern not in RECURRING_PATTERNS:
        raise ValueError(f"Unknown recurring pattern: {pattern}")
    if occurrences < 1 or occurrences > MAX_OCCURRENCES:
        raise ValueError(f"Occurrences must be between 1 and {MAX_OCCURRENCES}")

    start = date.fromisoformat(start_date)
    dates = []
    for i in range(occurrences):
        if pattern == "weekly":
            occurrence = start + timedelta(days=7 * i)
        elif pattern == "bi-weekly":
            occurrence = start + timedelta(days=14 * i)
        else:
            occurrence = add_months(start, i)
        dates.append(occurrence.isoformat())
    return dates
