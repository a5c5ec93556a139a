from datetime import date
from types import SimpleNamespace

from dentalbook.domain.scheduling.calendar import (
    GRID_DAYS,
    build_month_grid,
    date_range,
    first_grid_day,
    shift_month,
)


def appt(day, status="scheduled"):
    return SimpleNamespace(id=1, date=day, time="9:00 AM", status=status)


def test_grid_has_42_days_starting_sunday():
    grid = build_month_grid(2025, 6, [], [], today=date(2025, 6, 10))
    assert len(grid) == GRID_DAYS
    # June 1st 2025 is a Sunday
    assert grid[0].date == "2025-06-01"
    assert date.fromisoformat(grid[0].date).weekday() == 6
    assert grid[-1].date == "2025-07-12"


def test_grid_pads_with_previous_month():
    # July 1st 2025 is a Tuesday
    assert first_grid_day(2025, 7) == date(2025, 6, 29)
    grid = build_month_grid(2025, 7, [], [], today=date(2025, 7, 1))
    assert [d.is_current_month for d in grid[:3]] == [False, False, True]


def test_grid_marks_today_blocked_and_appointments():
    grid = build_month_grid(
        2025,
        6,
        [appt("2025-06-15"), appt("2025-06-15", status="completed"), appt("2025-06-16", status="cancelled")],
        ["2025-06-20"],
        today=date(2025, 6, 10),
    )
    by_date = {d.date: d for d in grid}
    assert by_date["2025-06-10"].is_today
    assert by_date["2025-06-20"].is_blocked
    assert len(by_date["2025-06-15"].appointments) == 1
    assert len(by_date["2025-06-16"].appointments) == 1


def test_shift_month_wraps_years():
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2025, 12, 1) == (2026, 1)


def test_date_range_is_inclusive():
    assert date_range("2025-07-01", "2025-07-03") == ["2025-07-01", "2025-07-02", "2025-07-03"]
    assert date_range("2025-07-03", "2025-07-01") == []
