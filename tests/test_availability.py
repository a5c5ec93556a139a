from types import SimpleNamespace

from dentalbook.domain.scheduling.availability import (
    AvailabilitySnapshot,
    check_slot,
    find_duplicate_slots,
    is_date_blocked,
)


def appt(id, date="2025-06-15", time="9:00 AM", status="scheduled"):
    return SimpleNamespace(id=id, date=date, time=time, status=status)


def test_same_date_and_time_is_taken():
    result = check_slot("2025-06-15", "9:00 AM", [appt(1)], [])
    assert result.taken
    assert result.conflicting_appointment.id == 1
    assert not result.available


def test_cancelled_appointments_release_the_slot():
    result = check_slot("2025-06-15", "9:00 AM", [appt(1, status="cancelled")], [])
    assert not result.taken


def test_every_other_status_holds_the_slot():
    for status in ("pending", "completed", "no-show", "rescheduled"):
        assert check_slot("2025-06-15", "9:00 AM", [appt(1, status=status)], []).taken


def test_different_time_is_free():
    assert check_slot("2025-06-15", "9:30 AM", [appt(1)], []).available


def test_exclude_id_ignores_the_appointment_being_edited():
    assert not check_slot("2025-06-15", "9:00 AM", [appt(1)], [], exclude_id=1).taken


def test_blocked_date_is_reported():
    result = check_slot("2025-07-01", "9:00 AM", [], ["2025-07-01", "2025-07-02"])
    assert result.blocked
    assert not result.taken


def test_failed_loads_fail_open():
    result = check_slot("2025-06-15", "9:00 AM", None, None)
    assert result.available
    assert not is_date_blocked("2025-06-15", None)


def test_duplicate_slots_within_one_request():
    slots = [("2025-06-15", "9:00 AM"), ("2025-06-15", "9:30 AM"), ("2025-06-15", "9:00 AM")]
    assert find_duplicate_slots(slots) == [2]
    assert find_duplicate_slots(slots[:2]) == []


def test_snapshot_loads_from_database(db, make_appointment):
    from dentalbook.domain.scheduling.repository import BlockedDateRepository

    make_appointment()
    BlockedDateRepository.add_blocked_dates(db, ["2025-06-20"])
    BlockedDateRepository.add_blocked_dates(db, ["2025-06-20", "2025-06-21"])

    snapshot = AvailabilitySnapshot.load(db)
    assert snapshot.blocked_dates == ["2025-06-20", "2025-06-21"]
    assert snapshot.check("2025-06-15", "9:00 AM").taken
    assert snapshot.is_blocked("2025-06-21")
