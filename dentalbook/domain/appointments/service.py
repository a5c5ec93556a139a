"""Appointment service - Business logic for staff appointment operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...catalog import get_procedure_price, is_known_procedure, time_slot_sort_key
from ...models import Appointment
from ..patients.repository import PatientRepository
from ..scheduling.availability import RELEASED_STATUSES, SLOT_TAKEN_MESSAGE, AvailabilitySnapshot
from .recurrence import expand_recurrence
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

BLOCKED_ON_CREATE_MESSAGE = "Cannot schedule appointment on blocked date"
BLOCKED_ON_EDIT_MESSAGE = "Sorry but the doctor isnt available to this day please pick another date"


def sort_by_slot(appointments: list[Appointment]) -> list[Appointment]:
    return sorted(appointments, key=lambda a: (a.date, time_slot_sort_key(a.time)))


def filter_appointments(
    appointments: list[Appointment],
    search: Optional[str] = None,
    status: Optional[str] = None,
    date: Optional[str] = None,
) -> list[Appointment]:
    """Search by patient or procedure, exact status and date match, chronological order"""
    search_lower = (search or "").lower()

    def matches(appointment: Appointment) -> bool:
        matches_search = (
            search_lower in (appointment.patient_name or "").lower()
            or search_lower in (appointment.procedure_type or "").lower()
        )
        matches_status = not status or appointment.status == status
        matches_date = not date or appointment.date == date
        return matches_search and matches_status and matches_date

    return sort_by_slot([a for a in appointments if matches(a)])


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    def list_appointments(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        date: Optional[str] = None,
    ) -> list[Appointment]:
        try:
            appointments = self.repo.list_appointments(self.db)
        except Exception as e:
            logger.error(f"❌ Error fetching appointments: {str(e)}")
            raise HTTPException(
                status_code=500, detail="Failed to load appointments. Please try again."
            ) from e
        return filter_appointments(appointments, search, status, date)

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.repo.get_appointment(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    # Appointment requests submitted through the public booking form

    def list_requests(self) -> list[Appointment]:
        return self.repo.list_appointments_by_status(self.db, "pending")

    def approve_request(self, appointment_id: int) -> Appointment:
        return self._set_status(appointment_id, "scheduled")

    def reject_request(self, appointment_id: int) -> Appointment:
        return self._set_status(appointment_id, "cancelled")

    def _set_status(self, appointment_id: int, status: str) -> Appointment:
        appointment = self.get_appointment(appointment_id)
        appointment = self.repo.update_appointment(self.db, appointment, status=status)
        logger.info(f"✅ Appointment {appointment_id} marked {status}")
        return appointment

    def create_appointments(self, data: AppointmentCreate) -> list[Appointment]:
        """
        Create one appointment, or one independent appointment per occurrence of a
        recurring request. Every occurrence must be bookable; all are stored or none.
        """
        patient = PatientRepository.get_patient(self.db, data.patientId)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")
        if not is_known_procedure(data.procedureType):
            raise HTTPException(status_code=400, detail="Unknown procedure type")

        if data.isRecurring:
            dates = expand_recurrence(data.date, data.recurringPattern, data.occurrences)
        else:
            dates = [data.date]

        snapshot = AvailabilitySnapshot.load(self.db)
        for day in dates:
            check = snapshot.check(day, data.time)
            if check.blocked:
                logger.warning(f"⚠️ Rejected appointment on blocked date {day}")
                raise HTTPException(status_code=400, detail=BLOCKED_ON_CREATE_MESSAGE)
            if check.taken:
                logger.warning(f"⚠️ Rejected appointment on taken slot {day} {data.time}")
                raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE)

        price = get_procedure_price(data.procedureType)
        try:
            created = [
                self.repo.create_appointment(
                    self.db,
                    commit=False,
                    patient_id=patient.id,
                    patient_name=f"{patient.first_name} {patient.last_name}",
                    patient_phone=patient.phone,
                    procedure_type=data.procedureType,
                    procedure_price=price,
                    price=price,
                    date=day,
                    time=data.time,
                    notes=data.notes,
                    status="scheduled",
                    is_recurring=data.isRecurring,
                    recurring_pattern=data.recurringPattern if data.isRecurring else None,
                    occurrences=data.occurrences if data.isRecurring else 1,
                )
                for day in dates
            ]
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error adding appointment: {str(e)}")
            raise HTTPException(status_code=500, detail="Error adding appointment") from e

        for appointment in created:
            self.db.refresh(appointment)
        logger.info(f"✅ Created {len(created)} appointment(s) for patient {patient.id}")
        return created

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate) -> Appointment:
        appointment = self.get_appointment(appointment_id)

        updates = {
            "patient_name": data.patientName,
            "patient_phone": data.patientPhone,
            "date": data.date,
            "time": data.time,
            "status": data.status,
            "notes": data.notes,
            "is_recurring": data.isRecurring,
            "occurrences": data.occurrences,
        }

        if data.patientId is not None:
            patient = PatientRepository.get_patient(self.db, data.patientId)
            if not patient:
                raise HTTPException(status_code=404, detail="Patient not found")
            updates["patient_id"] = patient.id
            updates["patient_name"] = f"{patient.first_name} {patient.last_name}"
            updates["patient_phone"] = patient.phone

        if data.procedureType is not None:
            if not is_known_procedure(data.procedureType):
                raise HTTPException(status_code=400, detail="Unknown procedure type")
            price = get_procedure_price(data.procedureType)
            updates.update(procedure_type=data.procedureType, procedure_price=price, price=price)

        new_date = data.date or appointment.date
        new_time = data.time or appointment.time
        moved = new_date != appointment.date or new_time != appointment.time
        # A cancelled appointment frees its slot; putting it back in use claims it again
        reactivated = appointment.status in RELEASED_STATUSES and (
            data.status or appointment.status
        ) not in RELEASED_STATUSES
        if moved or reactivated:
            check = AvailabilitySnapshot.load(self.db).check(
                new_date, new_time, exclude_id=appointment.id
            )
            if check.blocked:
                raise HTTPException(status_code=400, detail=BLOCKED_ON_EDIT_MESSAGE)
            if check.taken:
                raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE)

        try:
            appointment = self.repo.update_appointment(self.db, appointment, **updates)
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error updating appointment {appointment_id}: {str(e)}")
            raise HTTPException(
                status_code=500, detail="Failed to update appointment. Please try again."
            ) from e

        logger.info(f"✅ Appointment updated: {appointment_id}")
        return appointment

    def delete_appointment(self, appointment_id: int) -> dict:
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment deleted: {appointment_id}")
        return {"message": "Appointment deleted"}

    def fix_dates(self) -> bool:
        return self.repo.fix_appointment_dates(self.db)
