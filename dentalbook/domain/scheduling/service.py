"""Scheduling service - calendar month view, blocked dates and emergency reschedules"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment
from ...shared.validators import normalize_date_string
from ..appointments.repository import AppointmentRepository
from ..appointments.schemas import AppointmentResponse
from .calendar import MONTH_NAMES, WEEKDAY_LABELS, build_month_grid, date_range, shift_month
from .repository import BlockedDateRepository, EmergencyRescheduleRepository
from .schemas import (
    CalendarDayResponse,
    CalendarMonthResponse,
    EmergencyRescheduleRequest,
    EmergencyRescheduleResult,
    MonthRef,
)

logger = logging.getLogger(__name__)

RANGE_ERROR = "End date must be on or after start date"


def reschedule_note(existing: Optional[str], message: str) -> str:
    note = f"Emergency rescheduled: {message}"
    return f"{existing}\n{note}" if existing else note


def appointments_in_range(appointments: list[Appointment], start: str, end: str) -> list[Appointment]:
    """Scheduled appointments dated within [start, end]"""
    return [
        a
        for a in appointments
        if a.status == "scheduled" and a.date and start <= a.date <= end
    ]


class SchedulingService:
    """Service layer for calendar and date blocking"""

    def __init__(self, db: Session):
        self.db = db

    def get_month(self, year: int, month: int, today: Optional[date] = None) -> CalendarMonthResponse:
        if month < 1 or month > 12:
            raise HTTPException(status_code=400, detail="Month must be between 1 and 12")

        appointments = AppointmentRepository.list_appointments(self.db)
        blocked_dates = BlockedDateRepository.get_blocked_dates(self.db)
        grid = build_month_grid(year, month, appointments, blocked_dates, today)

        prev_year, prev_month = shift_month(year, month, -1)
        next_year, next_month = shift_month(year, month, 1)
        return CalendarMonthResponse(
            year=year,
            month=month,
            title=f"{MONTH_NAMES[month - 1]} {year}",
            weekdays=WEEKDAY_LABELS,
            days=[
                CalendarDayResponse(
                    date=day.date,
                    dayOfMonth=day.day_of_month,
                    isCurrentMonth=day.is_current_month,
                    isToday=day.is_today,
                    isBlocked=day.is_blocked,
                    appointments=[AppointmentResponse.from_model(a) for a in day.appointments],
                )
                for day in grid
            ],
            previous=MonthRef(year=prev_year, month=prev_month),
            next=MonthRef(year=next_year, month=next_month),
        )

    # Blocked dates

    def list_blocked_dates(self) -> list[str]:
        return BlockedDateRepository.get_blocked_dates(self.db)

    def add_blocked_dates(self, dates: list[str]) -> list[str]:
        BlockedDateRepository.add_blocked_dates(self.db, dates)
        logger.info(f"🚫 Blocked {len(dates)} date(s)")
        return BlockedDateRepository.get_blocked_dates(self.db)

    # Emergency reschedule

    def list_candidates(self, start_date: str, end_date: str) -> list[Appointment]:
        try:
            start_date = normalize_date_string(start_date)
            end_date = normalize_date_string(end_date)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        if end_date < start_date:
            raise HTTPException(status_code=400, detail=RANGE_ERROR)
        appointments = AppointmentRepository.list_appointments(self.db)
        return appointments_in_range(appointments, start_date, end_date)

    def list_history(self):
        return EmergencyRescheduleRepository.list_emergency_reschedules(self.db)

    def emergency_reschedule(self, request: EmergencyRescheduleRequest) -> EmergencyRescheduleResult:
        """
        Block every day from startDate to endDate and mark the selected appointments
        rescheduled. The audit record, blocked dates and status changes are committed
        together; on any failure nothing is kept.
        """
        if request.endDate < request.startDate:
            raise HTTPException(status_code=400, detail=RANGE_ERROR)

        days = date_range(request.startDate, request.endDate)
        rescheduled: list[int] = []

        try:
            EmergencyRescheduleRepository.add_emergency_reschedule(
                self.db,
                start_date=request.startDate,
                end_date=request.endDate,
                affected_appointments=list(request.appointmentIds),
                message=request.message,
                commit=False,
            )
            BlockedDateRepository.add_blocked_dates(self.db, days, commit=False)

            for appointment_id in request.appointmentIds:
                appointment = AppointmentRepository.get_appointment(self.db, appointment_id)
                if not appointment:
                    logger.warning(f"⚠️ Emergency reschedule skipped missing appointment {appointment_id}")
                    continue
                if appointment.status == "completed":
                    continue
                AppointmentRepository.update_appointment(
                    self.db,
                    appointment,
                    commit=False,
                    status="rescheduled",
                    notes=reschedule_note(appointment.notes, request.message),
                )
                rescheduled.append(appointment.id)

            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error processing emergency reschedule: {str(e)}")
            raise HTTPException(
                status_code=500, detail="Failed to process emergency reschedule. Please try again."
            ) from e

        if request.appointmentIds:
            message = "Emergency reschedule completed successfully"
        else:
            message = "Date range blocked successfully"

        logger.info(
            f"🚫 Emergency reschedule {request.startDate} to {request.endDate}: "
            f"{len(days)} day(s) blocked, {len(rescheduled)} appointment(s) rescheduled"
        )
        return EmergencyRescheduleResult(
            success=True,
            message=message,
            blockedDates=days,
            rescheduledAppointments=rescheduled,
        )
