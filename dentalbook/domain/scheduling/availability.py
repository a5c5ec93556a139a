"""
Slot availability - blocked-date and double-booking checks.

Checks run over collections already loaded for the request. A collection that
failed to load is passed as None and treated as empty, so the check fails open:
nothing is reported blocked or taken. Two requests racing for the same slot can
both pass; there is no storage-level uniqueness constraint.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# Statuses that release a slot for rebooking
RELEASED_STATUSES = frozenset({"cancelled"})

BLOCKED_DATE_MESSAGE = "Sorry but the doctor isnt available to this day please pick another date"
SLOT_TAKEN_MESSAGE = "This time slot is already booked. Please choose a different date or time."
DUPLICATE_SLOT_MESSAGE = (
    "Cannot book multiple appointments at the same time slot. Please choose different times."
)


@dataclass(frozen=True)
class SlotCheck:
    blocked: bool
    taken: bool
    conflicting_appointment: Optional[object] = None

    @property
    def available(self) -> bool:
        return not (self.blocked or self.taken)


def is_date_blocked(day: str, blocked_dates: Optional[Iterable[str]]) -> bool:
    return bool(day) and day in set(blocked_dates or ())


def find_conflict(
    day: str,
    time: str,
    appointments: Optional[Iterable],
    exclude_id=None,
):
    """First other non-cancelled appointment holding exactly this date and time"""
    for appointment in appointments or ():
        if exclude_id is not None and appointment.id == exclude_id:
            continue
        if appointment.status in RELEASED_STATUSES:
            continue
        if appointment.date == day and appointment.time == time:
            return appointment
    return None


def check_slot(
    day: str,
    time: str,
    appointments: Optional[Iterable],
    blocked_dates: Optional[Iterable[str]],
    exclude_id=None,
) -> SlotCheck:
    """Decide whether (day, time) can take a new appointment; no side effects"""
    conflict = find_conflict(day, time, appointments, exclude_id)
    return SlotCheck(
        blocked=is_date_blocked(day, blocked_dates),
        taken=conflict is not None,
        conflicting_appointment=conflict,
    )


def find_duplicate_slots(slots: Sequence[tuple[str, str]]) -> list[int]:
    """Indexes of rows that share a (date, time) with an earlier row of the same request"""
    seen = set()
    duplicates = []
    for index, slot in enumerate(slots):
        if slot in seen:
            duplicates.append(index)
        seen.add(slot)
    return duplicates


@dataclass
class AvailabilitySnapshot:
    """Appointments and blocked dates as loaded for one request"""

    appointments: Optional[list]
    blocked_dates: Optional[list[str]]

    @classmethod
    def load(cls, db: Session) -> "AvailabilitySnapshot":
        from ..appointments.repository import AppointmentRepository
        from .repository import BlockedDateRepository

        try:
            appointments = AppointmentRepository.list_appointments(db)
        except Exception as e:
            logger.error(f"❌ Error loading appointments for availability check: {str(e)}")
            appointments = None

        # Already fails open inside the repository
        blocked_dates = BlockedDateRepository.get_blocked_dates(db)
        return cls(appointments=appointments, blocked_dates=blocked_dates)

    def check(self, day: str, time: str, exclude_id=None) -> SlotCheck:
        return check_slot(day, time, self.appointments, self.blocked_dates, exclude_id)

    def is_blocked(self, day: str) -> bool:
        return is_date_blocked(day, self.blocked_dates)
