"""Scheduling router - calendar and blocked-date endpoints for staff"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import StaffSession, get_staff_session
from ...database import get_db
from ..appointments.schemas import AppointmentResponse
from .schemas import (
    BlockedDatesRequest,
    BlockedDatesResponse,
    CalendarMonthResponse,
    EmergencyRescheduleRecord,
    EmergencyRescheduleRequest,
    EmergencyRescheduleResult,
)
from .service import SchedulingService

router = APIRouter(tags=["Scheduling"])


def get_scheduling_service(db: Session = Depends(get_db)) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(db)


@router.get("/calendar", response_model=CalendarMonthResponse)
async def get_calendar(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    _: StaffSession = Depends(get_staff_session),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Month grid; defaults to the current month"""
    today = date.today()
    return service.get_month(year or today.year, month or today.month)


@router.get("/calendar/emergency-reschedule/candidates", response_model=list[AppointmentResponse])
async def get_emergency_candidates(
    startDate: str = Query(...),
    endDate: str = Query(...),
    _: StaffSession = Depends(get_staff_session),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [AppointmentResponse.from_model(a) for a in service.list_candidates(startDate, endDate)]


@router.post("/calendar/emergency-reschedule", response_model=EmergencyRescheduleResult)
async def emergency_reschedule(
    data: EmergencyRescheduleRequest,
    _: StaffSession = Depends(get_staff_session),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.emergency_reschedule(data)


@router.get("/calendar/emergency-reschedule/history", response_model=list[EmergencyRescheduleRecord])
async def get_emergency_history(
    _: StaffSession = Depends(get_staff_session),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [EmergencyRescheduleRecord.from_model(r) for r in service.list_history()]


@router.get("/blocked-dates", response_model=BlockedDatesResponse)
async def list_blocked_dates(
    _: StaffSession = Depends(get_staff_session),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return BlockedDatesResponse(dates=service.list_blocked_dates())


@router.post("/blocked-dates", response_model=BlockedDatesResponse, status_code=201)
async def add_blocked_dates(
    data: BlockedDatesRequest,
    _: StaffSession = Depends(get_staff_session),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return BlockedDatesResponse(dates=service.add_blocked_dates(data.dates))
