"""Patient router - FastAPI endpoints for staff patient management"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import StaffSession, get_staff_session
from ...database import get_db
from ..appointments.schemas import AppointmentResponse
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


@router.get("", response_model=list[PatientResponse])
async def list_patients(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    sort_by: str = Query("name", alias="sortBy"),
    _: StaffSession = Depends(get_staff_session),
    service: PatientService = Depends(get_patient_service),
):
    """List patients with search, status filter and sorting"""
    return [PatientResponse.from_model(p) for p in service.list_patients(search, status, sort_by)]


@router.post("", response_model=PatientResponse, status_code=201)
async def create_patient(
    data: PatientCreate,
    _: StaffSession = Depends(get_staff_session),
    service: PatientService = Depends(get_patient_service),
):
    return PatientResponse.from_model(service.create_patient(data))


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: int,
    _: StaffSession = Depends(get_staff_session),
    service: PatientService = Depends(get_patient_service),
):
    return PatientResponse.from_model(service.get_patient(patient_id))


@router.patch("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    _: StaffSession = Depends(get_staff_session),
    service: PatientService = Depends(get_patient_service),
):
    return PatientResponse.from_model(service.update_patient(patient_id, data))


@router.delete("/{patient_id}")
async def delete_patient(
    patient_id: int,
    _: StaffSession = Depends(get_staff_session),
    service: PatientService = Depends(get_patient_service),
):
    """Delete a patient (irreversible)"""
    return service.delete_patient(patient_id)


@router.get("/{patient_id}/appointments", response_model=list[AppointmentResponse])
async def get_patient_appointments(
    patient_id: int,
    _: StaffSession = Depends(get_staff_session),
    service: PatientService = Depends(get_patient_service),
):
    return [AppointmentResponse.from_model(a) for a in service.get_patient_appointments(patient_id)]
