"""Booking service - turns a completed public booking draft into stored records"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...catalog import PROCEDURE_TYPES, TIME_SLOTS, get_procedure_price
from ...shared.validators import phone_digits
from ..appointments.repository import AppointmentRepository
from ..patients.repository import PatientRepository
from ..scheduling.availability import AvailabilitySnapshot
from ..scheduling.repository import BlockedDateRepository
from . import workflow
from .schemas import (
    BookingDraft,
    BookingOptions,
    BookingStep,
    BookingSubmitResponse,
    ProcedureOption,
    StepResult,
)

logger = logging.getLogger(__name__)

SUBMIT_SUCCESS_MESSAGE = (
    "Appointment requests submitted successfully! Please wait for staff approval."
)
SUBMIT_FAILURE_MESSAGE = "Error submitting appointment requests. Please try again."


class BookingService:
    """Service layer for the public booking flow"""

    def __init__(self, db: Session):
        self.db = db

    def get_options(self) -> BookingOptions:
        return BookingOptions(
            procedures=[ProcedureOption(**p) for p in PROCEDURE_TYPES],
            timeSlots=TIME_SLOTS,
            blockedDates=BlockedDateRepository.get_blocked_dates(self.db),
        )

    def advance(self, draft: BookingDraft) -> StepResult:
        snapshot = AvailabilitySnapshot.load(self.db)
        next_draft, errors = workflow.advance(draft, snapshot)
        return StepResult(draft=next_draft, valid=not errors, errors=errors)

    def submit(self, draft: BookingDraft) -> BookingSubmitResponse:
        """
        Re-validate every step, then store one active patient and one pending
        appointment per roster entry in a single transaction.

        Raises:
            HTTPException 400: The draft fails validation (first problem reported)
            HTTPException 500: Storage failed; nothing from the submission is kept
        """
        if draft.step == BookingStep.SUBMITTED:
            raise HTTPException(status_code=400, detail="Booking has already been submitted")

        snapshot = AvailabilitySnapshot.load(self.db)
        errors = workflow.validate_all(draft, snapshot)
        if errors:
            logger.warning(f"⚠️ Booking submission rejected: {errors[0]}")
            raise HTTPException(status_code=400, detail=errors[0])

        contact = draft.contactInfo
        phone = phone_digits(contact.phone)
        patient_ids: list[int] = []
        appointment_ids: list[int] = []

        try:
            for entry in draft.entries:
                name = f"{entry.patient.firstName.strip()} {entry.patient.lastName.strip()}"
                patient = PatientRepository.create_patient(
                    self.db,
                    commit=False,
                    first_name=entry.patient.firstName.strip(),
                    last_name=entry.patient.lastName.strip(),
                    name=name,
                    contact_name=contact.contactName.strip(),
                    email=contact.email.strip().lower(),
                    phone=phone,
                    age=entry.patient.age,
                    sex=entry.patient.sex,
                    status="active",
                )
                price = get_procedure_price(entry.appointment.procedureType)
                appointment = AppointmentRepository.create_appointment(
                    self.db,
                    commit=False,
                    patient_id=patient.id,
                    patient_name=name,
                    patient_phone=phone,
                    procedure_type=entry.appointment.procedureType,
                    procedure_price=price,
                    price=price,
                    date=entry.appointment.date,
                    time=entry.appointment.time,
                    notes=entry.appointment.notes,
                    status="pending",
                )
                patient_ids.append(patient.id)
                appointment_ids.append(appointment.id)

            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error booking appointments: {str(e)}")
            raise HTTPException(status_code=500, detail=SUBMIT_FAILURE_MESSAGE) from e

        logger.info(f"✅ Booking submitted: {len(appointment_ids)} appointment request(s)")
        return BookingSubmitResponse(
            success=True,
            message=SUBMIT_SUCCESS_MESSAGE,
            patientIds=patient_ids,
            appointmentIds=appointment_ids,
        )
