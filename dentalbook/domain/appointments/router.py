"""Appointment router - FastAPI endpoints for staff appointment management"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import StaffSession, get_staff_session
from ...database import get_db
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate, DateFixResponse
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


# ============================================================================
# APPOINTMENT LIST
# ============================================================================


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    """All appointments matching the filters, in date and time order"""
    return [AppointmentResponse.from_model(a) for a in service.list_appointments(search, status, date)]


@router.post("", response_model=list[AppointmentResponse], status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Create an appointment; recurring requests return every occurrence created"""
    return [AppointmentResponse.from_model(a) for a in service.create_appointments(data)]


# ============================================================================
# APPOINTMENT REQUESTS (pending bookings from patients)
# ============================================================================


@router.get("/requests", response_model=list[AppointmentResponse])
async def list_appointment_requests(
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    return [AppointmentResponse.from_model(a) for a in service.list_requests()]


@router.post("/requests/{appointment_id}/approve", response_model=AppointmentResponse)
async def approve_appointment_request(
    appointment_id: int,
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.from_model(service.approve_request(appointment_id))


@router.post("/requests/{appointment_id}/reject", response_model=AppointmentResponse)
async def reject_appointment_request(
    appointment_id: int,
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.from_model(service.reject_request(appointment_id))


# ============================================================================
# MAINTENANCE
# ============================================================================


@router.post("/fix-dates", response_model=DateFixResponse)
async def fix_appointment_dates(
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Normalize every stored appointment date in one batch"""
    return DateFixResponse(success=service.fix_dates())


# ============================================================================
# SINGLE APPOINTMENT
# ============================================================================


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.from_model(service.get_appointment(appointment_id))


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.from_model(service.update_appointment(appointment_id, data))


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: int,
    _: StaffSession = Depends(get_staff_session),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.delete_appointment(appointment_id)
