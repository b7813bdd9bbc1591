import pytest

from api import create_app
from models import storage


@pytest.fixture
def app():
    """Create a fresh app bound to an empty in-memory database for each test."""
    app = create_app("testing")
    yield app
    storage.dispose()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


def register(client, email="t@example.com", password="password123", full_name="Test User", **extra):
    payload = {"fullName": full_name, "email": email, "password": password, **extra}
    return client.post("/api/users/register", json=payload)


def login(client, email="t@example.com", password="password123"):
    return client.post("/api/users/login", json={"email": email, "password": password})


@pytest.fixture
def make_user(client):
    """Register and log in a user; returns (login body, Authorization headers)."""

    def _make(email="t@example.com", password="password123", full_name="Test User"):
        assert register(client, email=email, password=password, full_name=full_name).status_code == 201
        res = login(client, email=email, password=password)
        assert res.status_code == 200
        body = res.get_json()
        return body, {"Authorization": f"Bearer {body['accessToken']}"}

    return _make


@pytest.fixture
def auth_headers(make_user):
    _, headers = make_user()
    return headers
