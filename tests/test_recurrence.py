import pytest

from dentalbook.domain.appointments.recurrence import expand_recurrence


def test_weekly():
    assert expand_recurrence("2025-01-06", "weekly", 3) == ["2025-01-06", "2025-01-13", "2025-01-20"]


def test_bi_weekly():
    assert expand_recurrence("2025-01-06", "bi-weekly", 3) == ["2025-01-06", "2025-01-20", "2025-02-03"]


def test_monthly_clamps_to_month_end():
    assert expand_recurrence("2025-01-31", "monthly", 4) == [
        "2025-01-31",
        "2025-02-28",
        "2025-03-31",
        "2025-04-30",
    ]


def test_monthly_crosses_year():
    assert expand_recurrence("2024-11-15", "monthly", 3) == ["2024-11-15", "2024-12-15", "2025-01-15"]


def test_single_occurrence():
    assert expand_recurrence("2025-01-06", "weekly", 1) == ["2025-01-06"]


@pytest.mark.parametrize("occurrences", [0, 53])
def test_occurrence_bounds(occurrences):
    with pytest.raises(ValueError):
        expand_recurrence("2025-01-06", "weekly", occurrences)


def test_unknown_pattern():
    with pytest.raises(ValueError):
        expand_recurrence("2025-01-06", "daily", 2)
