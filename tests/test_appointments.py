from dentalbook.domain.appointments.service import BLOCKED_ON_CREATE_MESSAGE, BLOCKED_ON_EDIT_MESSAGE
from dentalbook.domain.scheduling.availability import SLOT_TAKEN_MESSAGE
from dentalbook.domain.scheduling.repository import BlockedDateRepository
from dentalbook.models import Appointment


def create_payload(patient_id, **overrides):
    payload = {
        "patientId": patient_id,
        "procedureType": "Filling",
        "date": "2025-01-06",
        "time": "10:00 AM",
        "notes": "Upper left molar",
    }
    payload.update(overrides)
    return payload


def test_requires_authentication(client):
    response = client.get("/appointments")
    assert response.status_code == 401


class TestCreate:
    def test_single_appointment_copies_patient_and_price(self, staff_client, make_patient):
        patient = make_patient()
        response = staff_client.post("/appointments", json=create_payload(patient.id))

        assert response.status_code == 201
        [created] = response.json()
        assert created["patientName"] == "Maria Santos"
        assert created["patientPhone"] == "09171234567"
        assert created["procedurePrice"] == 3500
        assert created["status"] == "scheduled"
        assert created["isRecurring"] is False

    def test_weekly_recurrence_creates_independent_records(self, staff_client, make_patient, db):
        patient = make_patient()
        response = staff_client.post(
            "/appointments",
            json=create_payload(
                patient.id, isRecurring=True, recurringPattern="weekly", occurrences=3
            ),
        )

        assert response.status_code == 201
        assert [a["date"] for a in response.json()] == ["2025-01-06", "2025-01-13", "2025-01-20"]
        stored = db.query(Appointment).order_by(Appointment.date).all()
        assert len({a.id for a in stored}) == 3
        assert all(a.recurring_pattern == "weekly" for a in stored)

    def test_recurrence_is_all_or_nothing(self, staff_client, make_patient, make_appointment, db):
        patient = make_patient()
        make_appointment(patient, date="2025-01-20", time="10:00 AM")

        response = staff_client.post(
            "/appointments",
            json=create_payload(patient.id, isRecurring=True, occurrences=3),
        )

        assert response.status_code == 409
        assert response.json()["detail"] == SLOT_TAKEN_MESSAGE
        assert db.query(Appointment).count() == 1

    def test_blocked_date_rejected(self, staff_client, make_patient, db):
        patient = make_patient()
        BlockedDateRepository.add_blocked_dates(db, ["2025-01-06"])
        response = staff_client.post("/appointments", json=create_payload(patient.id))
        assert response.status_code == 400
        assert response.json()["detail"] == BLOCKED_ON_CREATE_MESSAGE

    def test_cancelled_slot_can_be_rebooked(self, staff_client, make_patient, make_appointment):
        patient = make_patient()
        make_appointment(patient, date="2025-01-06", time="10:00 AM", status="cancelled")
        response = staff_client.post("/appointments", json=create_payload(patient.id))
        assert response.status_code == 201

    def test_unknown_patient(self, staff_client):
        response = staff_client.post("/appointments", json=create_payload(999))
        assert response.status_code == 404

    def test_occurrence_limit_is_schema_validated(self, staff_client, make_patient):
        patient = make_patient()
        response = staff_client.post(
            "/appointments", json=create_payload(patient.id, isRecurring=True, occurrences=60)
        )
        assert response.status_code == 422

    def test_time_must_be_a_slot(self, staff_client, make_patient):
        patient = make_patient()
        response = staff_client.post("/appointments", json=create_payload(patient.id, time="12:00 PM"))
        assert response.status_code == 422


class TestListAndRequests:
    def test_filters_and_orders_by_date_then_slot(self, staff_client, make_patient, make_appointment):
        maria = make_patient()
        jose = make_patient(first_name="Jose", last_name="Rizal")
        make_appointment(maria, date="2025-06-16", time="9:00 AM")
        make_appointment(jose, date="2025-06-15", time="1:00 PM", procedure_type="Crown")
        make_appointment(maria, date="2025-06-15", time="10:30 AM", status="completed")

        body = staff_client.get("/appointments").json()
        assert [(a["date"], a["time"]) for a in body] == [
            ("2025-06-15", "10:30 AM"),
            ("2025-06-15", "1:00 PM"),
            ("2025-06-16", "9:00 AM"),
        ]

        assert len(staff_client.get("/appointments", params={"search": "crown"}).json()) == 1
        assert len(staff_client.get("/appointments", params={"search": "MARIA"}).json()) == 2
        assert len(staff_client.get("/appointments", params={"status": "completed"}).json()) == 1
        assert len(staff_client.get("/appointments", params={"date": "2025-06-16"}).json()) == 1

    def test_approve_and_reject_requests(self, staff_client, make_patient, make_appointment):
        patient = make_patient()
        first = make_appointment(patient, status="pending", time="9:00 AM")
        second = make_appointment(patient, status="pending", time="9:30 AM")

        assert len(staff_client.get("/appointments/requests").json()) == 2

        approved = staff_client.post(f"/appointments/requests/{first.id}/approve").json()
        rejected = staff_client.post(f"/appointments/requests/{second.id}/reject").json()
        assert approved["status"] == "scheduled"
        assert rejected["status"] == "cancelled"
        assert staff_client.get("/appointments/requests").json() == []


class TestEdit:
    def test_procedure_change_reprices(self, staff_client, make_patient, make_appointment):
        appointment = make_appointment(make_patient())
        response = staff_client.patch(
            f"/appointments/{appointment.id}", json={"procedureType": "Root Canal"}
        )
        assert response.status_code == 200
        assert response.json()["procedurePrice"] == 8000
        assert response.json()["price"] == 8000

    def test_patient_change_copies_contact(self, staff_client, make_patient, make_appointment):
        appointment = make_appointment(make_patient())
        jose = make_patient(first_name="Jose", last_name="Rizal", phone="09998887777")
        body = staff_client.patch(
            f"/appointments/{appointment.id}", json={"patientId": jose.id}
        ).json()
        assert body["patientName"] == "Jose Rizal"
        assert body["patientPhone"] == "09998887777"

    def test_move_onto_blocked_date(self, staff_client, make_patient, make_appointment, db):
        appointment = make_appointment(make_patient())
        BlockedDateRepository.add_blocked_dates(db, ["2025-06-20"])
        response = staff_client.patch(f"/appointments/{appointment.id}", json={"date": "2025-06-20"})
        assert response.status_code == 400
        assert response.json()["detail"] == BLOCKED_ON_EDIT_MESSAGE

    def test_move_onto_taken_slot(self, staff_client, make_patient, make_appointment):
        patient = make_patient()
        appointment = make_appointment(patient, time="9:00 AM")
        make_appointment(patient, time="9:30 AM")
        response = staff_client.patch(f"/appointments/{appointment.id}", json={"time": "9:30 AM"})
        assert response.status_code == 409

    def test_status_change_keeps_own_slot(self, staff_client, make_patient, make_appointment):
        appointment = make_appointment(make_patient())
        response = staff_client.patch(
            f"/appointments/{appointment.id}",
            json={"status": "completed", "date": "2025-06-15", "time": "9:00 AM"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

    def test_restoring_cancelled_appointment_rechecks_slot(
        self, staff_client, make_patient, make_appointment
    ):
        cancelled = make_appointment(make_patient(), status="cancelled")
        make_appointment(make_patient(first_name="Carlo", last_name="Diaz"), status="scheduled")

        response = staff_client.patch(f"/appointments/{cancelled.id}", json={"status": "scheduled"})

        assert response.status_code == 409
        assert response.json()["detail"] == SLOT_TAKEN_MESSAGE

    def test_restoring_cancelled_appointment_into_free_slot(
        self, staff_client, make_patient, make_appointment
    ):
        cancelled = make_appointment(make_patient(), status="cancelled")
        response = staff_client.patch(f"/appointments/{cancelled.id}", json={"status": "scheduled"})
        assert response.status_code == 200
        assert response.json()["status"] == "scheduled"


def test_delete(staff_client, make_patient, make_appointment, db):
    appointment = make_appointment(make_patient())
    assert staff_client.delete(f"/appointments/{appointment.id}").status_code == 200
    assert db.query(Appointment).count() == 0
    assert staff_client.delete(f"/appointments/{appointment.id}").status_code == 404


def test_fix_dates_normalizes_stored_values(staff_client, make_patient, make_appointment, db):
    appointment = make_appointment(make_patient())
    db.query(Appointment).filter(Appointment.id == appointment.id).update(
        {"date": "2025-6-5"}, synchronize_session=False
    )
    db.commit()

    response = staff_client.post("/appointments/fix-dates")
    assert response.json() == {"success": True}
    db.expire_all()
    assert db.get(Appointment, appointment.id).date == "2025-06-05"
