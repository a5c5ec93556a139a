"""Patient domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...catalog import MAX_PATIENT_AGE
from ...shared.validators import validate_email, validate_phone


def _check_age(v):
    if v is not None and (v < 0 or v > MAX_PATIENT_AGE):
        raise ValueError(f"Age must be between 0 and {MAX_PATIENT_AGE}")
    return v


class PatientCreate(BaseModel):
    """Schema for a patient entered by staff"""

    firstName: str
    lastName: str
    contactName: Optional[str] = None
    email: Optional[str] = None
    phone: str
    age: int
    sex: Literal["male", "female"] = "male"
    status: Literal["active", "inactive"] = "active"
    lastVisit: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("age")
    @classmethod
    def check_age(cls, v):
        return _check_age(v)


class PatientUpdate(BaseModel):
    """Schema for editing a patient; omitted fields are left unchanged"""

    firstName: Optional[str] = None
    lastName: Optional[str] = None
    name: Optional[str] = None
    contactName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    sex: Optional[Literal["male", "female"]] = None
    status: Optional[Literal["active", "inactive"]] = None
    lastVisit: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v is not None:
            return validate_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("age")
    @classmethod
    def check_age(cls, v):
        return _check_age(v)


class PatientResponse(BaseModel):
    id: int
    firstName: str
    lastName: str
    name: str
    contactName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    sex: Optional[str] = None
    status: Optional[str] = None
    lastVisit: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            firstName=patient.first_name or "",
            lastName=patient.last_name or "",
            name=patient.name or "",
            contactName=patient.contact_name,
            email=patient.email,
            phone=patient.phone,
            age=patient.age,
            sex=patient.sex,
            status=patient.status,
            lastVisit=patient.last_visit,
            createdAt=patient.created_at,
            updatedAt=patient.updated_at,
        )
