"""Appointment repository - Database operations for appointments"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment
from ...shared.validators import normalize_date_string

logger = logging.getLogger(__name__)


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def list_appointments(db: Session) -> list[Appointment]:
        """Get every appointment ordered by date"""
        return db.query(Appointment).order_by(Appointment.date.asc(), Appointment.id.asc()).all()

    @staticmethod
    def list_appointments_by_status(db: Session, status: str) -> list[Appointment]:
        return db.query(Appointment).filter(Appointment.status == status).all()

    @staticmethod
    def list_appointments_by_patient(db: Session, patient_id: int) -> list[Appointment]:
        return db.query(Appointment).filter(Appointment.patient_id == patient_id).all()

    @staticmethod
    def get_appointment(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def create_appointment(db: Session, commit: bool = True, **appointment_data) -> Appointment:
        """Create an appointment; only the calendar-day part of the date is stored"""
        appointment_data["date"] = normalize_date_string(appointment_data.get("date"))
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        if commit:
            db.commit()
            db.refresh(appointment)
        else:
            db.flush()
        return appointment

    @staticmethod
    def update_appointment(
        db: Session, appointment: Appointment, commit: bool = True, **updates
    ) -> Appointment:
        """Update an appointment with provided fields"""
        if updates.get("date"):
            updates["date"] = normalize_date_string(updates["date"])

        for key, value in updates.items():
            if value is not None and hasattr(appointment, key):
                setattr(appointment, key, value)

        if commit:
            db.commit()
            db.refresh(appointment)
        else:
            db.flush()
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()

    @staticmethod
    def fix_appointment_dates(db: Session) -> bool:
        """
        Rewrite every stored date as a zero-padded YYYY-MM-DD day.

        All corrections are committed as one batch; returns False (and rolls back)
        if anything fails.
        """
        try:
            corrected = 0
            for appointment in db.query(Appointment).all():
                fixed = normalize_date_string(appointment.date)
                if fixed != appointment.date:
                    appointment.date = fixed
                    corrected += 1
            db.commit()
            logger.info(f"✅ Corrected {corrected} appointment date(s)")
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"❌ Error fixing appointment dates: {str(e)}")
            return False
