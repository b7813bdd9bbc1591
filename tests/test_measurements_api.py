"""
HTTP tests for measurements; ownership is resolved through the parent customer.
"""
import uuid

import pytest

BASE = "/api/customers"


@pytest.fixture
def customer(client, auth_headers):
    res = client.post(BASE, json={"fullName": "John Doe"}, headers=auth_headers)
    return res.get_json()["customer"]


@pytest.fixture
def measurement(client, auth_headers, customer):
    res = client.post(
        f"{BASE}/measurements",
        json={"customerId": customer["id"], "type": "shirt", "data": {"chest": 40, "sleeve": 24}, "notes": "cotton"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    return res.get_json()["measurement"]


@pytest.fixture
def other_headers(make_user):
    _, headers = make_user(email="other@example.com", full_name="Other Tailor")
    return headers


def test_add_measurement(measurement, customer):
    assert measurement["customerId"] == customer["id"]
    assert measurement["type"] == "shirt"
    assert measurement["data"] == {"chest": 40, "sleeve": 24}
    assert measurement["notes"] == "cotton"


def test_add_requires_type_and_data(client, auth_headers, customer):
    res = client.post(f"{BASE}/measurements", json={"customerId": customer["id"]}, headers=auth_headers)
    assert res.status_code == 400
    errors = res.get_json()["error"]["meta"]["errors"]
    assert "type" in errors and "data" in errors


def test_add_for_missing_customer(client, auth_headers):
    res = client.post(
        f"{BASE}/measurements",
        json={"customerId": str(uuid.uuid4()), "type": "shirt", "data": {}},
        headers=auth_headers,
    )
    assert res.status_code == 404


def test_add_for_someone_elses_customer(client, customer, other_headers):
    res = client.post(
        f"{BASE}/measurements",
        json={"customerId": customer["id"], "type": "shirt", "data": {"chest": 1}},
        headers=other_headers,
    )
    assert res.status_code == 403


def test_get_measurement(client, auth_headers, measurement):
    res = client.get(f"{BASE}/measurements/{measurement['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.get_json()["measurement"]["id"] == measurement["id"]


def test_update_measurement(client, auth_headers, measurement):
    res = client.put(
        f"{BASE}/measurements/{measurement['id']}",
        json={"data": {"chest": 42, "sleeve": 25}},
        headers=auth_headers,
    )
    assert res.status_code == 200
    updated = res.get_json()["measurement"]
    assert updated["data"] == {"chest": 42, "sleeve": 25}
    assert updated["notes"] == "cotton"

    res = client.put(f"{BASE}/measurements/{measurement['id']}", json={"notes": "Adjusted chest size"}, headers=auth_headers)
    assert res.get_json()["measurement"]["notes"] == "Adjusted chest size"
    assert res.get_json()["measurement"]["data"] == {"chest": 42, "sleeve": 25}


def test_update_requires_data_or_notes(client, auth_headers, measurement):
    res = client.put(f"{BASE}/measurements/{measurement['id']}", json={}, headers=auth_headers)
    assert res.status_code == 400


def test_delete_measurement(client, auth_headers, measurement):
    res = client.delete(f"{BASE}/measurements/{measurement['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.get_json()["message"] == "Measurement deleted successfully"
    assert client.get(f"{BASE}/measurements/{measurement['id']}", headers=auth_headers).status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_other_owner_is_forbidden(client, other_headers, measurement, method):
    kwargs = {"json": {"notes": "mine now"}} if method == "put" else {}
    res = getattr(client, method)(f"{BASE}/measurements/{measurement['id']}", headers=other_headers, **kwargs)
    assert res.status_code == 403


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_missing_measurement_is_not_found(client, auth_headers, method):
    kwargs = {"json": {"notes": "x"}} if method == "put" else {}
    res = getattr(client, method)(f"{BASE}/measurements/{uuid.uuid4()}", headers=auth_headers, **kwargs)
    assert res.status_code == 404


def test_requires_authentication(client, measurement):
    assert client.get(f"{BASE}/measurements/{measurement['id']}").status_code == 401
