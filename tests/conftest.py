import os

# Settings are read at import time
os.environ["TESTING"] = "1"
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOGIN_LATENCY_SECONDS"] = "0"

import pytest
from fastapi.testclient import TestClient

from cabinet.main import app
from cabinet.api.deps import get_store
from cabinet.repositories.memory import create_memory_store
from cabinet.repositories.seed import seed_demo_data


@pytest.fixture
def store():
    """A fresh store holding the demo accounts, patients and bookings."""
    return seed_demo_data(create_memory_store())


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client):
    """Log in and return bearer headers; the session cookie is dropped."""
    def _login(username: str, password: str = "123") -> dict:
        response = client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def admin_headers(login_as):
    return login_as("admin")


@pytest.fixture
def secretary_headers(login_as):
    return login_as("julie")


@pytest.fixture
def therapist_headers(login_as):
    return login_as("sophie")


@pytest.fixture
def ids(store):
    """Ids of the demo records, by username or patient name."""
    found = {u.username: u.id for u in store.users.list()}
    found.update({p.name: p.id for p in store.patients.list()})
    return found
