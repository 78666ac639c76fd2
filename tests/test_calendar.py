import pytest

from cabinet.models.appointment import AppointmentStatus


def booking(ids, **overrides):
    data = {
        "patient_id": ids["Jean Dupont"],
        "therapist_id": ids["sophie"],
        "treatment_type": "consultation",
        "date": "2030-01-08",
        "time": "10:00",
        "duration": 30,
    }
    data.update(overrides)
    return data


def slot(week, day_index, hour):
    return week["days"][day_index]["slots"][hour - week["hours"][0]]["appointments"]


class TestWeekView:

    def test_week_grid_shape(self, client, secretary_headers):
        response = client.get(
            "/api/v1/calendar/week",
            params={"anchor": "2030-01-13"},
            headers=secretary_headers
        )
        assert response.status_code == 200

        week = response.json()
        assert week["week_start"] == "2030-01-07"
        assert [d["date"] for d in week["days"]] == [
            "2030-01-07", "2030-01-08", "2030-01-09",
            "2030-01-10", "2030-01-11", "2030-01-12",
        ]
        assert week["hours"] == list(range(8, 19))
        assert all(len(day["slots"]) == 11 for day in week["days"])
        assert week["previous_anchor"] == "2030-01-06"
        assert week["next_anchor"] == "2030-01-20"
        assert week["can_edit"] is True
        assert {t["username"] for t in week["therapists"]} == {"sophie", "marc"}

    def test_appointment_only_in_its_start_cell(self, client, ids, secretary_headers):
        client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, time="10:30", duration=120),
            headers=secretary_headers
        )

        week = client.get(
            "/api/v1/calendar/week",
            params={"anchor": "2030-01-08"},
            headers=secretary_headers
        ).json()

        assert len(slot(week, 1, 10)) == 1
        assert slot(week, 1, 11) == []
        assert slot(week, 1, 12) == []

    def test_therapist_filter(self, client, ids, secretary_headers):
        client.post("/api/v1/calendar/appointments", json=booking(ids), headers=secretary_headers)
        client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, therapist_id=ids["marc"], patient_id=ids["Pierre Martin"]),
            headers=secretary_headers
        )

        week = client.get(
            "/api/v1/calendar/week",
            params={"anchor": "2030-01-08", "therapist_id": ids["marc"]},
            headers=secretary_headers
        ).json()

        cell = slot(week, 1, 10)
        assert len(cell) == 1
        assert cell[0]["therapist_name"] == "Marc Ostéo"
        assert week["therapist_filter"] == ids["marc"]

    def test_therapist_sees_read_only_planning(self, client, therapist_headers):
        response = client.get("/api/v1/calendar/week", headers=therapist_headers)
        assert response.status_code == 200
        assert response.json()["can_edit"] is False

    def test_anonymous_is_sent_to_login(self, client):
        response = client.get("/api/v1/calendar/week")
        assert response.status_code == 401
        assert response.json()["redirect_to"] == "/login"


class TestCreateAppointment:

    def test_create_appointment(self, client, ids, secretary_headers):
        response = client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, treatment_type="ostéopathie", duration=45),
            headers=secretary_headers
        )
        assert response.status_code == 201

        data = response.json()
        assert data["status"] == "En attente"
        assert data["price"] == 60
        assert data["patient_name"] == "Jean Dupont"
        assert data["therapist_name"] == "Sophie Kiné"
        assert data["start_time"] == "2030-01-08T10:00:00"
        assert data["end_time"] == "2030-01-08T10:45:00"

    @pytest.mark.parametrize("treatment, price", [
        ("consultation", 30),
        ("ostéopathie", 60),
        ("ondes de choc", 45),
        ("nutrition", 50),
        ("tecartherapie", 30),
    ])
    def test_default_price_by_treatment(self, client, ids, secretary_headers, treatment, price):
        response = client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, treatment_type=treatment),
            headers=secretary_headers
        )
        assert response.json()["price"] == price

    def test_explicit_price_overrides_default(self, client, ids, admin_headers):
        response = client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, price=42.5),
            headers=admin_headers
        )
        assert response.json()["price"] == 42.5

    def test_end_is_after_start(self, client, ids, store, secretary_headers):
        client.post("/api/v1/calendar/appointments", json=booking(ids, duration=1), headers=secretary_headers)

        for appointment in store.appointments.list():
            assert appointment.end_time > appointment.start_time

    def test_non_positive_duration_rejected(self, client, ids, secretary_headers):
        response = client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, duration=0),
            headers=secretary_headers
        )
        assert response.status_code == 422

    def test_unknown_patient(self, client, ids, secretary_headers):
        response = client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, patient_id="missing"),
            headers=secretary_headers
        )
        assert response.status_code == 404

    def test_therapist_must_have_therapist_role(self, client, ids, secretary_headers):
        response = client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, therapist_id=ids["julie"]),
            headers=secretary_headers
        )
        assert response.status_code == 404

    def test_therapist_cannot_book(self, client, ids, store, therapist_headers):
        before = len(store.appointments.list())

        response = client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids),
            headers=therapist_headers
        )
        assert response.status_code == 403
        assert len(store.appointments.list()) == before


class TestAppointmentLifecycle:

    @pytest.fixture
    def appointment(self, client, ids, secretary_headers):
        return client.post(
            "/api/v1/calendar/appointments",
            json=booking(ids, treatment_type="nutrition"),
            headers=secretary_headers
        ).json()

    def test_settle_records_one_gain(self, client, store, appointment, secretary_headers):
        before = len(store.transactions.list())

        response = client.post(
            f"/api/v1/calendar/appointments/{appointment['id']}/settle",
            json={"method": "Espèces"},
            headers=secretary_headers
        )
        assert response.status_code == 200

        data = response.json()
        assert data["appointment"]["status"] == "Effectué"
        assert data["transaction"]["type"] == "gain"
        assert data["transaction"]["amount"] == 50
        assert data["transaction"]["method"] == "Espèces"
        assert data["transaction"]["category"] == "Séance nutrition - Jean Dupont"
        assert len(store.transactions.list()) == before + 1
        assert store.appointments.get(appointment["id"]).status.value == "Effectué"

    def test_settle_with_custom_amount(self, client, appointment, secretary_headers):
        response = client.post(
            f"/api/v1/calendar/appointments/{appointment['id']}/settle",
            json={"amount": 35, "method": "Chèque"},
            headers=secretary_headers
        )
        assert response.json()["transaction"]["amount"] == 35

    def test_settle_without_body_uses_defaults(self, client, appointment, admin_headers):
        response = client.post(
            f"/api/v1/calendar/appointments/{appointment['id']}/settle",
            headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["transaction"]["method"] == "TPE"

    def test_settle_twice_is_refused(self, client, store, appointment, secretary_headers):
        url = f"/api/v1/calendar/appointments/{appointment['id']}/settle"
        client.post(url, json={}, headers=secretary_headers)
        before = len(store.transactions.list())

        response = client.post(url, json={}, headers=secretary_headers)
        assert response.status_code == 409
        assert len(store.transactions.list()) == before

    def test_cancel(self, client, store, appointment, secretary_headers):
        response = client.post(
            f"/api/v1/calendar/appointments/{appointment['id']}/cancel",
            headers=secretary_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Annulé"

    def test_cancelled_cannot_be_settled(self, client, appointment, secretary_headers):
        client.post(f"/api/v1/calendar/appointments/{appointment['id']}/cancel", headers=secretary_headers)

        response = client.post(
            f"/api/v1/calendar/appointments/{appointment['id']}/settle",
            json={},
            headers=secretary_headers
        )
        assert response.status_code == 409

    def test_settled_cannot_be_cancelled(self, client, appointment, secretary_headers):
        client.post(f"/api/v1/calendar/appointments/{appointment['id']}/settle", json={}, headers=secretary_headers)

        response = client.post(
            f"/api/v1/calendar/appointments/{appointment['id']}/cancel",
            headers=secretary_headers
        )
        assert response.status_code == 409

    def test_confirm(self, client, appointment, secretary_headers):
        response = client.post(
            f"/api/v1/calendar/appointments/{appointment['id']}/confirm",
            headers=secretary_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Confirmé"

    def test_therapist_cannot_settle_or_cancel(self, client, appointment, therapist_headers):
        for action in ("settle", "cancel"):
            response = client.post(
                f"/api/v1/calendar/appointments/{appointment['id']}/{action}",
                headers=therapist_headers
            )
            assert response.status_code == 403

    def test_unknown_appointment(self, client, secretary_headers):
        response = client.post(
            "/api/v1/calendar/appointments/missing/cancel",
            headers=secretary_headers
        )
        assert response.status_code == 404

    def test_store_still_permits_resettlement(self, store, appointment):
        """Only the service refuses a second settlement; the store writes anything."""
        store.appointments.update(appointment["id"], status=AppointmentStatus.DONE)
        assert store.appointments.update(appointment["id"], status=AppointmentStatus.DONE) is not None

    def test_seeded_appointments_start_on_working_hours(self, store):
        starts = sorted(a.start_time.hour for a in store.appointments.list())
        assert starts == [9, 10, 14]
