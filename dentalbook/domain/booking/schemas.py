"""Booking domain schemas - the public multi-patient booking draft"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import normalize_date_string


class BookingStep(str, Enum):
    CONTACT_INFO = "contact_info"
    PATIENT_ROSTER = "patient_roster"
    APPOINTMENT_DETAILS = "appointment_details"
    SUBMITTED = "submitted"


class ContactInfo(BaseModel):
    """Person making the booking; copied onto every patient created"""

    contactName: str = ""
    email: str = ""
    phone: str = ""


class PatientInfo(BaseModel):
    firstName: str = ""
    lastName: str = ""
    age: int = 0
    sex: str = "male"


class AppointmentDetails(BaseModel):
    procedureType: str = ""
    date: str = ""
    time: str = ""
    notes: str = ""

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        # Slot and blocked-date checks compare padded YYYY-MM-DD strings
        return normalize_date_string(v) if v else v


class RosterEntry(BaseModel):
    """One patient and the appointment requested for them"""

    patient: PatientInfo = Field(default_factory=PatientInfo)
    appointment: AppointmentDetails = Field(default_factory=AppointmentDetails)


class BookingDraft(BaseModel):
    step: BookingStep = BookingStep.CONTACT_INFO
    contactInfo: ContactInfo = Field(default_factory=ContactInfo)
    entries: list[RosterEntry] = Field(default_factory=lambda: [RosterEntry()])


class StepResult(BaseModel):
    draft: BookingDraft
    valid: bool
    errors: list[str] = []


class RosterEditRequest(BaseModel):
    draft: BookingDraft
    index: int = 0


class ProcedureOption(BaseModel):
    name: str
    price: int


class BookingOptions(BaseModel):
    procedures: list[ProcedureOption]
    timeSlots: list[str]
    blockedDates: list[str]


class BookingSubmitResponse(BaseModel):
    success: bool
    message: str
    patientIds: list[int]
    appointmentIds: list[int]
