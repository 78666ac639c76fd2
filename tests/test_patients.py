import pytest


def names(response):
    return sorted(p["name"] for p in response.json())


class TestPatientList:

    def test_staff_see_every_patient(self, client, admin_headers, secretary_headers):
        for headers in (admin_headers, secretary_headers):
            response = client.get("/api/v1/patients", headers=headers)
            assert response.status_code == 200
            assert names(response) == ["Jean Dupont", "Marie Curie", "Pierre Martin"]

    def test_therapist_sees_own_patients(self, client, login_as):
        sophie = client.get("/api/v1/patients", headers=login_as("sophie"))
        assert names(sophie) == ["Jean Dupont", "Marie Curie"]

        marc = client.get("/api/v1/patients", headers=login_as("marc"))
        assert names(marc) == ["Pierre Martin"]

    @pytest.mark.parametrize("therapist", ["sophie", "marc"])
    def test_therapist_list_is_subset_of_admin_list(self, client, login_as, admin_headers, therapist):
        everyone = set(names(client.get("/api/v1/patients", headers=admin_headers)))
        own = set(names(client.get("/api/v1/patients", headers=login_as(therapist))))
        assert own <= everyone

    def test_new_booking_extends_therapist_list(self, client, ids, secretary_headers, login_as):
        client.post(
            "/api/v1/calendar/appointments",
            json={"patient_id": ids["Pierre Martin"], "therapist_id": ids["sophie"], "date": "2030-01-08"},
            headers=secretary_headers
        )

        response = client.get("/api/v1/patients", headers=login_as("sophie"))
        assert "Pierre Martin" in names(response)

    def test_search_by_name(self, client, admin_headers):
        response = client.get("/api/v1/patients", params={"search": "MAR"}, headers=admin_headers)
        assert names(response) == ["Marie Curie", "Pierre Martin"]

    def test_anonymous_is_sent_to_login(self, client):
        response = client.get("/api/v1/patients")
        assert response.status_code == 401
        assert response.json()["redirect_to"] == "/login"


class TestPatientDetail:

    def test_admin_reads_any_file(self, client, ids, admin_headers):
        response = client.get(f"/api/v1/patients/{ids['Pierre Martin']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["pathology"] == "Rééducation genou"

    def test_therapist_cannot_read_other_patients(self, client, ids, therapist_headers):
        response = client.get(f"/api/v1/patients/{ids['Pierre Martin']}", headers=therapist_headers)
        assert response.status_code == 404

    def test_unknown_patient(self, client, admin_headers):
        response = client.get("/api/v1/patients/missing", headers=admin_headers)
        assert response.status_code == 404


class TestCreatePatient:

    def test_create_patient(self, client, secretary_headers):
        response = client.post(
            "/api/v1/patients",
            json={
                "name": "Lucie Bernard",
                "age": 27,
                "phone": "0655443322",
                "insurance": "Harmonie",
                "pathology": "Entorse cheville",
                "email": "",
            },
            headers=secretary_headers
        )
        assert response.status_code == 201

        data = response.json()
        assert data["id"]
        assert data["name"] == "Lucie Bernard"
        assert data["address"] == ""
        assert data["email"] is None

    def test_age_defaults_to_zero(self, client, admin_headers):
        response = client.post("/api/v1/patients", json={"name": "Paul Petit"}, headers=admin_headers)
        assert response.json()["age"] == 0

    def test_name_is_required(self, client, admin_headers):
        response = client.post("/api/v1/patients", json={"name": "  "}, headers=admin_headers)
        assert response.status_code == 422

    def test_therapist_may_open_a_file(self, client, therapist_headers):
        response = client.post("/api/v1/patients", json={"name": "Nina Roux"}, headers=therapist_headers)
        assert response.status_code == 201
