"""
Booking workflow - state machine for the public booking form.

    contact_info -> patient_roster -> appointment_details -> submitted

Each input step has a pure validity function returning the list of problems
that block leaving it. Going back is always allowed. Only a successful
submission enters ``submitted``.
"""

from typing import Optional

from ...catalog import MAX_PATIENT_AGE, PATIENT_SEXES, TIME_SLOTS, is_known_procedure
from ...shared.validators import (
    BOOKING_EMAIL_ERROR,
    PHONE_ERROR,
    is_valid_booking_email,
    is_valid_name,
    is_valid_phone,
)
from ..scheduling.availability import (
    BLOCKED_DATE_MESSAGE,
    DUPLICATE_SLOT_MESSAGE,
    SLOT_TAKEN_MESSAGE,
    AvailabilitySnapshot,
    find_duplicate_slots,
)
from .schemas import BookingDraft, BookingStep, ContactInfo, RosterEntry

NEXT_STEP = {
    BookingStep.CONTACT_INFO: BookingStep.PATIENT_ROSTER,
    BookingStep.PATIENT_ROSTER: BookingStep.APPOINTMENT_DETAILS,
}
PREVIOUS_STEP = {
    BookingStep.PATIENT_ROSTER: BookingStep.CONTACT_INFO,
    BookingStep.APPOINTMENT_DETAILS: BookingStep.PATIENT_ROSTER,
}

SUBMIT_REQUIRED_MESSAGE = "Submit your booking to finish"


def validate_contact_info(contact: ContactInfo) -> list[str]:
    errors = []
    if not contact.contactName.strip():
        errors.append("Contact name is required")
    if not contact.email.strip():
        errors.append("Email is required")
    elif not is_valid_booking_email(contact.email.strip()):
        errors.append(BOOKING_EMAIL_ERROR)
    if not contact.phone.strip():
        errors.append("Phone number is required")
    elif not is_valid_phone(contact.phone):
        errors.append(PHONE_ERROR)
    return errors


def validate_patient_roster(
    entries: list[RosterEntry], blocked_dates: Optional[list[str]] = None
) -> list[str]:
    if not entries:
        return ["Please add at least one patient"]

    errors = []
    for number, entry in enumerate(entries, start=1):
        patient = entry.patient
        if not patient.firstName.strip():
            errors.append(f"Patient {number}: first name is required")
        elif not is_valid_name(patient.firstName):
            errors.append(f"Patient {number}: first name may only contain letters and spaces")
        if not patient.lastName.strip():
            errors.append(f"Patient {number}: last name is required")
        elif not is_valid_name(patient.lastName):
            errors.append(f"Patient {number}: last name may only contain letters and spaces")
        if patient.age <= 0 or patient.age > MAX_PATIENT_AGE:
            errors.append(f"Patient {number}: age must be between 1 and {MAX_PATIENT_AGE}")
        if patient.sex not in PATIENT_SEXES:
            errors.append(f"Patient {number}: sex must be male or female")

    # A date picked earlier and blocked since still stops the form here
    blocked = set(blocked_dates or ())
    if any(entry.appointment.date in blocked for entry in entries if entry.appointment.date):
        errors.append(BLOCKED_DATE_MESSAGE)
    return errors


def validate_appointment_details(
    entries: list[RosterEntry], snapshot: Optional[AvailabilitySnapshot] = None
) -> list[str]:
    snapshot = snapshot or AvailabilitySnapshot(appointments=None, blocked_dates=None)
    errors = []
    for number, entry in enumerate(entries, start=1):
        details = entry.appointment
        if not details.procedureType:
            errors.append(f"Patient {number}: please select a procedure")
        elif not is_known_procedure(details.procedureType):
            errors.append(f"Patient {number}: unknown procedure {details.procedureType}")
        if not details.date:
            errors.append(f"Patient {number}: please select a date")
        if not details.time:
            errors.append(f"Patient {number}: please select a time")
        elif details.time not in TIME_SLOTS:
            errors.append(f"Patient {number}: {details.time} is not an available time slot")
        if not details.date or not details.time:
            continue

        check = snapshot.check(details.date, details.time)
        if check.blocked:
            errors.append(BLOCKED_DATE_MESSAGE)
        elif check.taken:
            errors.append(f"Patient {number}: {SLOT_TAKEN_MESSAGE}")

    slots = [(e.appointment.date, e.appointment.time) for e in entries if e.appointment.date]
    if find_duplicate_slots(slots):
        errors.append(DUPLICATE_SLOT_MESSAGE)
    return errors


def validate_step(
    draft: BookingDraft, snapshot: Optional[AvailabilitySnapshot] = None
) -> list[str]:
    """Problems that keep the draft from leaving its current step"""
    if draft.step == BookingStep.CONTACT_INFO:
        return validate_contact_info(draft.contactInfo)
    if draft.step == BookingStep.PATIENT_ROSTER:
        blocked_dates = snapshot.blocked_dates if snapshot else None
        return validate_patient_roster(draft.entries, blocked_dates)
    if draft.step == BookingStep.APPOINTMENT_DETAILS:
        return validate_appointment_details(draft.entries, snapshot)
    return []


def validate_all(draft: BookingDraft, snapshot: Optional[AvailabilitySnapshot] = None) -> list[str]:
    blocked_dates = snapshot.blocked_dates if snapshot else None
    return (
        validate_contact_info(draft.contactInfo)
        + validate_patient_roster(draft.entries, blocked_dates)
        + validate_appointment_details(draft.entries, snapshot)
    )


def advance(
    draft: BookingDraft, snapshot: Optional[AvailabilitySnapshot] = None
) -> tuple[BookingDraft, list[str]]:
    """Move to the next input step when the current one is valid"""
    if draft.step == BookingStep.APPOINTMENT_DETAILS:
        return draft, [SUBMIT_REQUIRED_MESSAGE]
    if draft.step not in NEXT_STEP:
        return draft, []

    errors = validate_step(draft, snapshot)
    if errors:
        return draft, errors
    return draft.model_copy(update={"step": NEXT_STEP[draft.step]}), []


def back(draft: BookingDraft) -> BookingDraft:
    if draft.step not in PREVIOUS_STEP:
        return draft
    return draft.model_copy(update={"step": PREVIOUS_STEP[draft.step]})


def add_entry(draft: BookingDraft) -> BookingDraft:
    return draft.model_copy(update={"entries": [*draft.entries, RosterEntry()]})


def remove_entry(draft: BookingDraft, index: int) -> BookingDraft:
    """Drop one roster entry; the last remaining entry is kept"""
    if len(draft.entries) <= 1 or not 0 <= index < len(draft.entries):
        return draft
    entries = [e for i, e in enumerate(draft.entries) if i != index]
    return draft.model_copy(update={"entries": entries})
