"""Month grid for the staff calendar"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

GRID_DAYS = 42  # 6 rows x 7 columns
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_NAMES = [
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
]

# Completed visits are kept off the calendar
HIDDEN_STATUSES = frozenset({"completed"})


@dataclass
class CalendarDay:
    date: str
    day_of_month: int
    is_current_month: bool
    is_today: bool = False
    is_blocked: bool = False
    appointments: list = field(default_factory=list)


def first_grid_day(year: int, month: int) -> date:
    """Sunday on or before the first of the month"""
    first = date(year, month, 1)
    # date.weekday(): Monday=0 ... Sunday=6
    days_since_sunday = (first.weekday() + 1) % 7
    return first - timedelta(days=days_since_sunday)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def date_range(start: str, end: str) -> list[str]:
    """Every calendar day from start to end inclusive; empty when end is before start"""
    current = date.fromisoformat(start)
    last = date.fromisoformat(end)
    days = []
    while current <= last:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days


def build_month_grid(
    year: int,
    month: int,
    appointments: Optional[list] = None,
    blocked_dates: Optional[list[str]] = None,
    today: Optional[date] = None,
) -> list[CalendarDay]:
    """Project appointments and blocked dates onto a 42-cell month grid"""
    today_str = (today or date.today()).isoformat()
    blocked = set(blocked_dates or ())

    by_date: dict[str, list] = {}
    for appointment in appointments or ():
        if appointment.status in HIDDEN_STATUSES:
            continue
        by_date.setdefault((appointment.date or "").split("T")[0], []).append(appointment)

    start = first_grid_day(year, month)
    days = []
    for offset in range(GRID_DAYS):
        current = start + timedelta(days=offset)
        key = current.isoformat()
        days.append(
            CalendarDay(
                date=key,
                day_of_month=current.day,
                is_current_month=current.month == month and current.year == year,
                is_today=key == today_str,
                is_blocked=key in blocked,
                appointments=by_date.get(key, []),
            )
        )
    return days
