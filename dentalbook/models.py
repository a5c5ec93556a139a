from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from .database import Base


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    name = Column(String(255), nullable=False, default="")  # "first last", denormalized
    contact_name = Column(String(255), nullable=True)  # Person who made the booking
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    age = Column(Integer, nullable=True)
    sex = Column(String(10), nullable=True)  # male, female
    status = Column(String(20), nullable=True, default="active")  # active, inactive
    last_visit = Column(String(10), nullable=True)  # YYYY-MM-DD
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    # Plain reference; deleting a patient leaves its appointments in place
    patient_id = Column(Integer, nullable=True, index=True)
    patient_name = Column(String(255), nullable=False, default="")
    patient_phone = Column(String(50), nullable=True)
    procedure_type = Column(String(100), nullable=False)
    procedure_price = Column(Integer, nullable=False, default=0)  # Looked up once at creation
    price = Column(Integer, nullable=False, default=0)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    time = Column(String(10), nullable=False)  # One of catalog.TIME_SLOTS
    notes = Column(Text, nullable=True, default="")
    # pending, scheduled, completed, cancelled, no-show, rescheduled
    status = Column(String(20), nullable=False, default="pending", index=True)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_pattern = Column(String(20), nullable=True)  # weekly, bi-weekly, monthly
    occurrences = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class BlockedDateSet(Base):
    """A batch of blocked days; the blocked calendar is the union of all batches"""

    __tablename__ = "blocked_dates"

    id = Column(Integer, primary_key=True, index=True)
    dates = Column(JSON, nullable=False, default=list)  # ["YYYY-MM-DD", ...]
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class EmergencyReschedule(Base):
    """Audit record of an emergency reschedule; side effects are applied at submission"""

    __tablename__ = "emergency_reschedules"

    id = Column(Integer, primary_key=True, index=True)
    start_date = Column(String(10), nullable=False)
    end_date = Column(String(10), nullable=False)
    affected_appointments = Column(JSON, nullable=False, default=list)  # Appointment ids
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
