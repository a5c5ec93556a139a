from datetime import date

from dentalbook.domain.scheduling.repository import BlockedDateRepository
from dentalbook.domain.scheduling.service import SchedulingService
from dentalbook.models import Appointment, EmergencyReschedule


class TestCalendarMonth:
    def test_month_view_with_navigation(self, db, make_patient, make_appointment):
        patient = make_patient()
        make_appointment(patient, date="2025-06-15")
        make_appointment(patient, date="2025-06-16", status="completed")
        BlockedDateRepository.add_blocked_dates(db, ["2025-06-20"])

        month = SchedulingService(db).get_month(2025, 6, today=date(2025, 6, 10))

        assert month.title == "June 2025"
        assert len(month.days) == 42
        assert (month.previous.year, month.previous.month) == (2025, 5)
        assert (month.next.year, month.next.month) == (2025, 7)
        by_date = {d.date: d for d in month.days}
        assert len(by_date["2025-06-15"].appointments) == 1
        assert by_date["2025-06-16"].appointments == []
        assert by_date["2025-06-20"].isBlocked
        assert by_date["2025-06-10"].isToday

    def test_calendar_endpoint(self, staff_client):
        response = staff_client.get("/calendar", params={"year": 2025, "month": 12})
        assert response.status_code == 200
        assert response.json()["next"] == {"year": 2026, "month": 1}

    def test_invalid_month(self, staff_client):
        assert staff_client.get("/calendar", params={"year": 2025, "month": 13}).status_code == 400


class TestBlockedDates:
    def test_batches_are_unioned(self, staff_client):
        staff_client.post("/blocked-dates", json={"dates": ["2025-12-25", "2025-12-24"]})
        response = staff_client.post("/blocked-dates", json={"dates": ["2025-12-25", "2026-1-1"]})
        assert response.status_code == 201
        assert response.json()["dates"] == ["2025-12-24", "2025-12-25", "2026-01-01"]
        assert staff_client.get("/blocked-dates").json()["dates"] == [
            "2025-12-24",
            "2025-12-25",
            "2026-01-01",
        ]

    def test_empty_batch_rejected(self, staff_client):
        assert staff_client.post("/blocked-dates", json={"dates": []}).status_code == 422


class TestEmergencyReschedule:
    def test_candidates_are_scheduled_appointments_in_range(
        self, staff_client, make_patient, make_appointment
    ):
        patient = make_patient()
        inside = make_appointment(patient, date="2025-07-02")
        make_appointment(patient, date="2025-07-02", time="9:30 AM", status="completed")
        make_appointment(patient, date="2025-07-04")

        response = staff_client.get(
            "/calendar/emergency-reschedule/candidates",
            params={"startDate": "2025-07-01", "endDate": "2025-07-03"},
        )
        assert [a["id"] for a in response.json()] == [inside.id]

    def test_candidates_range_without_padding(self, staff_client, make_patient, make_appointment):
        patient = make_patient()
        inside = make_appointment(patient, date="2025-07-02")
        make_appointment(patient, date="2025-07-10")

        response = staff_client.get(
            "/calendar/emergency-reschedule/candidates",
            params={"startDate": "2025-7-1", "endDate": "2025-7-3"},
        )
        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [inside.id]

    def test_candidates_reject_invalid_date(self, staff_client):
        response = staff_client.get(
            "/calendar/emergency-reschedule/candidates",
            params={"startDate": "2025-13-01", "endDate": "2025-07-03"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid date: 2025-13-01"

    def test_candidates_reject_inverted_range(self, staff_client):
        response = staff_client.get(
            "/calendar/emergency-reschedule/candidates",
            params={"startDate": "2025-07-03", "endDate": "2025-07-01"},
        )
        assert response.status_code == 400

    def test_blocks_range_and_reschedules_selection(
        self, staff_client, make_patient, make_appointment, db
    ):
        patient = make_patient()
        first = make_appointment(patient, date="2025-07-01", notes="Bring x-rays")
        second = make_appointment(patient, date="2025-07-03", time="2:00 PM")

        response = staff_client.post(
            "/calendar/emergency-reschedule",
            json={
                "startDate": "2025-07-01",
                "endDate": "2025-07-03",
                "message": "Dentist out sick",
                "appointmentIds": [first.id, second.id],
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["blockedDates"] == ["2025-07-01", "2025-07-02", "2025-07-03"]
        assert sorted(body["rescheduledAppointments"]) == sorted([first.id, second.id])

        db.expire_all()
        assert BlockedDateRepository.get_blocked_dates(db) == [
            "2025-07-01",
            "2025-07-02",
            "2025-07-03",
        ]
        rows = {a.id: a for a in db.query(Appointment).all()}
        assert rows[first.id].status == "rescheduled"
        assert rows[second.id].status == "rescheduled"
        assert rows[first.id].notes == "Bring x-rays\nEmergency rescheduled: Dentist out sick"
        assert rows[second.id].notes == "Emergency rescheduled: Dentist out sick"

        [record] = db.query(EmergencyReschedule).all()
        assert record.affected_appointments == [first.id, second.id]
        assert record.message == "Dentist out sick"

    def test_completed_appointments_are_left_alone(
        self, staff_client, make_patient, make_appointment, db
    ):
        done = make_appointment(make_patient(), date="2025-07-01", status="completed")
        response = staff_client.post(
            "/calendar/emergency-reschedule",
            json={
                "startDate": "2025-07-01",
                "endDate": "2025-07-01",
                "message": "Power outage",
                "appointmentIds": [done.id],
            },
        )
        assert response.json()["rescheduledAppointments"] == []
        db.expire_all()
        assert db.get(Appointment, done.id).status == "completed"

    def test_no_selection_only_blocks_dates(self, staff_client, db):
        response = staff_client.post(
            "/calendar/emergency-reschedule",
            json={"startDate": "2025-07-01", "endDate": "2025-07-02", "message": "Seminar"},
        )
        assert response.json()["message"] == "Date range blocked successfully"
        assert BlockedDateRepository.get_blocked_dates(db) == ["2025-07-01", "2025-07-02"]

    def test_requires_message_and_valid_range(self, staff_client):
        missing_message = staff_client.post(
            "/calendar/emergency-reschedule",
            json={"startDate": "2025-07-01", "endDate": "2025-07-02", "message": "  "},
        )
        inverted = staff_client.post(
            "/calendar/emergency-reschedule",
            json={"startDate": "2025-07-03", "endDate": "2025-07-01", "message": "Seminar"},
        )
        assert missing_message.status_code == 422
        assert inverted.status_code == 400

    def test_failure_rolls_everything_back(
        self, staff_client, make_patient, make_appointment, db, monkeypatch
    ):
        from dentalbook.domain.appointments.repository import AppointmentRepository

        appointment = make_appointment(make_patient(), date="2025-07-01")

        def broken_update(*args, **kwargs):
            raise RuntimeError("write failed")

        monkeypatch.setattr(AppointmentRepository, "update_appointment", staticmethod(broken_update))

        response = staff_client.post(
            "/calendar/emergency-reschedule",
            json={
                "startDate": "2025-07-01",
                "endDate": "2025-07-01",
                "message": "Flood",
                "appointmentIds": [appointment.id],
            },
        )

        assert response.status_code == 500
        db.expire_all()
        assert BlockedDateRepository.get_blocked_dates(db) == []
        assert db.query(EmergencyReschedule).count() == 0
        assert db.get(Appointment, appointment.id).status == "scheduled"

    def test_history(self, staff_client):
        staff_client.post(
            "/calendar/emergency-reschedule",
            json={"startDate": "2025-07-01", "endDate": "2025-07-01", "message": "Seminar"},
        )
        [record] = staff_client.get("/calendar/emergency-reschedule/history").json()
        assert record["message"] == "Seminar"
        assert record["affectedAppointments"] == []
