import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.setdefault("FIREBASE_PROJECT_ID", "dentalbook-test")
os.environ.setdefault("FIREBASE_API_KEY", "test-api-key")

import pytest
from fastapi.testclient import TestClient

from dentalbook.auth import StaffSession, get_staff_session
from dentalbook.database import Base, SessionLocal, engine
from dentalbook.domain.appointments.repository import AppointmentRepository
from dentalbook.domain.patients.repository import PatientRepository
from dentalbook.main import app

STAFF = StaffSession(
    uid="staff-1",
    email="staff@dentalbook.test",
    name="Front Desk",
    token="test-token",
    auth_time=1700000000,
)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """Unauthenticated client"""
    return TestClient(app)


@pytest.fixture
def staff_client():
    app.dependency_overrides[get_staff_session] = lambda: STAFF
    return TestClient(app)


@pytest.fixture
def make_patient(db):
    def _make(first_name="Maria", last_name="Santos", **overrides):
        data = {
            "first_name": first_name,
            "last_name": last_name,
            "name": f"{first_name} {last_name}",
            "email": "maria@gmail.com",
            "phone": "09171234567",
            "age": 30,
            "sex": "female",
            "status": "active",
        }
        data.update(overrides)
        return PatientRepository.create_patient(db, **data)

    return _make


@pytest.fixture
def make_appointment(db):
    def _make(patient=None, **overrides):
        data = {
            "patient_id": patient.id if patient else None,
            "patient_name": patient.name if patient else "Walk In",
            "patient_phone": patient.phone if patient else None,
            "procedure_type": "Cleaning",
            "procedure_price": 2500,
            "price": 2500,
            "date": "2025-06-15",
            "time": "9:00 AM",
            "notes": "",
            "status": "scheduled",
        }
        data.update(overrides)
        return AppointmentRepository.create_appointment(db, **data)

    return _make
