"""Scheduling domain schemas - calendar grid, blocked dates and emergency reschedules"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import normalize_date_string
from ..appointments.schemas import AppointmentResponse


class CalendarDayResponse(BaseModel):
    date: str
    dayOfMonth: int
    isCurrentMonth: bool
    isToday: bool
    isBlocked: bool
    appointments: list[AppointmentResponse] = []


class MonthRef(BaseModel):
    year: int
    month: int


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    title: str
    weekdays: list[str]
    days: list[CalendarDayResponse]
    previous: MonthRef
    next: MonthRef


class BlockedDatesRequest(BaseModel):
    dates: list[str]

    @field_validator("dates")
    @classmethod
    def check_dates(cls, v):
        if not v:
            raise ValueError("At least one date is required")
        return [normalize_date_string(d) for d in v]


class BlockedDatesResponse(BaseModel):
    dates: list[str]


class EmergencyRescheduleRequest(BaseModel):
    """Block a date range and optionally flag appointments inside it as rescheduled"""

    startDate: str
    endDate: str
    message: str
    appointmentIds: list[int] = []

    @field_validator("startDate", "endDate")
    @classmethod
    def check_date(cls, v):
        return normalize_date_string(v)

    @field_validator("message")
    @classmethod
    def check_message(cls, v):
        if not v or not v.strip():
            raise ValueError("Message is required")
        return v.strip()


class EmergencyRescheduleResult(BaseModel):
    success: bool
    message: str
    blockedDates: list[str]
    rescheduledAppointments: list[int]


class EmergencyRescheduleRecord(BaseModel):
    id: int
    startDate: str
    endDate: str
    affectedAppointments: list[int]
    message: str
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, record) -> "EmergencyRescheduleRecord":
        return cls(
            id=record.id,
            startDate=record.start_date,
            endDate=record.end_date,
            affectedAppointments=list(record.affected_appointments or []),
            message=record.message,
            createdAt=record.created_at,
        )
