"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...catalog import MAX_OCCURRENCES, TIME_SLOTS, get_total_price
from ...shared.validators import normalize_date_string

AppointmentStatus = Literal["pending", "scheduled", "completed", "cancelled", "no-show", "rescheduled"]
RecurringPattern = Literal["weekly", "bi-weekly", "monthly"]


def _check_time_slot(v):
    if v is not None and v not in TIME_SLOTS:
        raise ValueError(f"Time must be one of: {', '.join(TIME_SLOTS)}")
    return v


def _check_date(v):
    if v is not None:
        return normalize_date_string(v)
    return v


class AppointmentCreate(BaseModel):
    """Schema for a staff-created appointment (single or recurring)"""

    patientId: int
    procedureType: str
    date: str
    time: str
    notes: str = ""
    isRecurring: bool = False
    recurringPattern: RecurringPattern = "weekly"
    occurrences: int = 1

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return _check_date(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return _check_time_slot(v)

    @field_validator("occurrences")
    @classmethod
    def check_occurrences(cls, v):
        if v < 1 or v > MAX_OCCURRENCES:
            raise ValueError(f"Occurrences must be between 1 and {MAX_OCCURRENCES}")
        return v


class AppointmentUpdate(BaseModel):
    """Schema for editing an appointment; omitted fields are left unchanged"""

    patientId: Optional[int] = None
    patientName: Optional[str] = None
    patientPhone: Optional[str] = None
    procedureType: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None
    isRecurring: Optional[bool] = None
    occurrences: Optional[int] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return _check_date(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return _check_time_slot(v)


class AppointmentResponse(BaseModel):
    id: int
    patientId: Optional[int] = None
    patientName: str
    patientPhone: Optional[str] = None
    procedureType: str
    procedurePrice: int
    price: int
    totalPrice: int
    date: str
    time: str
    notes: Optional[str] = None
    status: str
    isRecurring: bool = False
    recurringPattern: Optional[str] = None
    occurrences: Optional[int] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            patientId=appointment.patient_id,
            patientName=appointment.patient_name or "",
            patientPhone=appointment.patient_phone,
            procedureType=appointment.procedure_type,
            # Older rows may only carry price
            procedurePrice=appointment.procedure_price or appointment.price or 0,
            price=appointment.price or 0,
            totalPrice=get_total_price(appointment),
            date=appointment.date,
            time=appointment.time,
            notes=appointment.notes,
            status=appointment.status,
            isRecurring=bool(appointment.is_recurring),
            recurringPattern=appointment.recurring_pattern,
            occurrences=appointment.occurrences,
            createdAt=appointment.created_at,
            updatedAt=appointment.updated_at,
        )


class DateFixResponse(BaseModel):
    success: bool
