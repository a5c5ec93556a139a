"""Patient service - Business logic for patient operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment, Patient
from ..appointments.repository import AppointmentRepository
from .repository import PatientRepository
from .schemas import PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)

SORT_FIELDS = ("name", "age", "lastVisit")


def full_name(patient: Patient) -> str:
    return f"{patient.first_name or ''} {patient.last_name or ''}"


def filter_patients(
    patients: list[Patient],
    search: Optional[str] = None,
    status: Optional[str] = None,
    sort_by: str = "name",
) -> list[Patient]:
    """Search by name, email or phone, filter by status and sort, all in memory"""
    search_lower = (search or "").lower()

    def matches(patient: Patient) -> bool:
        matches_search = (
            search_lower in full_name(patient).lower()
            or search_lower in (patient.email or "").lower()
            or search_lower in (patient.phone or "").lower()
        )
        # Patients without a status count as inactive
        patient_status = patient.status or "inactive"
        matches_status = not status or status == "all" or patient_status == status
        return matches_search and matches_status

    result = [p for p in patients if matches(p)]

    if sort_by == "name":
        result.sort(key=full_name)
    elif sort_by == "age":
        result.sort(key=lambda p: p.age or 0)
    elif sort_by == "lastVisit":
        result.sort(key=lambda p: p.last_visit or "")
    return result


def split_name(name: Optional[str]) -> tuple[str, str]:
    parts = (name or "").split(" ")
    return parts[0], " ".join(parts[1:])


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()

    def list_patients(
        self, search: Optional[str] = None, status: Optional[str] = None, sort_by: str = "name"
    ) -> list[Patient]:
        try:
            patients = self.repo.list_patients(self.db)
        except Exception as e:
            logger.error(f"❌ Error fetching patients: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to load patients") from e
        return filter_patients(patients, search, status, sort_by)

    def get_patient(self, patient_id: int) -> Patient:
        patient = self.repo.get_patient(self.db, patient_id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")
        return patient

    def create_patient(self, data: PatientCreate) -> Patient:
        patient = self.repo.create_patient(
            self.db,
            first_name=data.firstName,
            last_name=data.lastName,
            name=f"{data.firstName} {data.lastName}",
            contact_name=data.contactName,
            email=data.email,
            phone=data.phone,
            age=data.age,
            sex=data.sex,
            status=data.status,
            last_visit=data.lastVisit,
        )
        logger.info(f"✅ Patient created: {patient.id}")
        return patient

    def update_patient(self, patient_id: int, data: PatientUpdate) -> Patient:
        patient = self.get_patient(patient_id)

        first_name = data.firstName if data.firstName is not None else patient.first_name
        last_name = data.lastName if data.lastName is not None else patient.last_name
        # Older records may only carry the combined name
        if (not first_name or not last_name) and (data.name or patient.name):
            first_name, last_name = split_name(data.name or patient.name)

        updates = {
            "first_name": first_name,
            "last_name": last_name,
            "name": f"{first_name} {last_name}",
            "contact_name": data.contactName,
            "email": data.email,
            "phone": data.phone,
            "age": data.age,
            "sex": data.sex,
            "status": data.status,
            "last_visit": data.lastVisit,
        }
        patient = self.repo.update_patient(self.db, patient, **updates)
        logger.info(f"✅ Patient updated: {patient.id}")
        return patient

    def delete_patient(self, patient_id: int) -> dict:
        """Irreversible; existing appointments keep their denormalized patient data"""
        patient = self.get_patient(patient_id)
        self.repo.delete_patient(self.db, patient)
        logger.info(f"🗑️ Patient deleted: {patient_id}")
        return {"message": "Patient deleted"}

    def get_patient_appointments(self, patient_id: int) -> list[Appointment]:
        self.get_patient(patient_id)
        return AppointmentRepository.list_appointments_by_patient(self.db, patient_id)
