"""
Tests for the error envelope, the error taxonomy and the health endpoints.
"""
import uuid

import pytest

from api import create_app
from models import storage
from models.customer import Customer
from models.user import User
from utils.errors import AppError, ErrorKind, STATUS_CODES, kind_for_status


class TestErrorKinds:
    @pytest.mark.parametrize(
        "kind,status",
        [
            (ErrorKind.BAD_REQUEST, 400),
            (ErrorKind.VALIDATION_ERROR, 400),
            (ErrorKind.UNAUTHORIZED, 401),
            (ErrorKind.FORBIDDEN, 403),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.METHOD_NOT_ALLOWED, 405),
            (ErrorKind.CONFLICT, 409),
            (ErrorKind.UNSUPPORTED_MEDIA_TYPE, 415),
            (ErrorKind.UNPROCESSABLE_ENTITY, 422),
            (ErrorKind.TOO_MANY_REQUESTS, 429),
            (ErrorKind.INTERNAL, 500),
            (ErrorKind.SERVICE_UNAVAILABLE, 503),
            (ErrorKind.TIMEOUT, 504),
        ],
    )
    def test_status_table(self, kind, status):
        assert STATUS_CODES[kind] == status
        assert AppError(kind).status == status

    def test_every_kind_has_a_status(self):
        assert set(STATUS_CODES) == set(ErrorKind)

    def test_default_message_and_code(self):
        err = AppError(ErrorKind.NOT_FOUND)
        assert err.message == "Not found"
        assert err.code == "NOT_FOUND"
        assert AppError(ErrorKind.INTERNAL).code == "INTERNAL_ERROR"

    def test_kind_for_status(self):
        assert kind_for_status(400) is ErrorKind.BAD_REQUEST
        assert kind_for_status(405) is ErrorKind.METHOD_NOT_ALLOWED
        assert kind_for_status(418) is ErrorKind.BAD_REQUEST
        assert kind_for_status(502) is ErrorKind.INTERNAL


class TestEnvelope:
    def test_unmatched_route(self, client):
        res = client.get("/api/nope")
        assert res.status_code == 404
        body = res.get_json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["error"]["message"] == "Route GET /api/nope not found"

    def test_method_not_allowed(self, client):
        res = client.get("/api/users/login")
        assert res.status_code == 405
        assert res.get_json()["error"]["code"] == "METHOD_NOT_ALLOWED"

    def test_unexpected_exception_is_generic_500(self, app, client):
        @app.get("/boom")
        def boom():
            raise RuntimeError("database password is hunter2")

        res = client.get("/boom")
        assert res.status_code == 500
        error = res.get_json()["error"]
        assert error["code"] == "INTERNAL_ERROR"
        assert error["message"] == "An unexpected error occurred"
        # testing config exposes details for debugging
        assert "stack" in error

    def test_production_hides_details(self):
        app = create_app(
            "production",
            {"ACCESS_TOKEN_SECRET": "prod-access", "REFRESH_TOKEN_SECRET": "prod-refresh", "DATABASE_URL": "sqlite:///:memory:"},
        )
        try:
            @app.get("/boom")
            def boom():
                raise RuntimeError("secret internals")

            client = app.test_client()
            res = client.get("/boom")
            assert res.status_code == 500
            assert res.get_json() == {
                "success": False,
                "error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"},
            }

            res = client.post("/api/users/register", json={})
            error = res.get_json()["error"]
            assert res.status_code == 400
            assert "meta" not in error and "stack" not in error
        finally:
            storage.dispose()

    def test_production_refuses_default_secrets(self):
        with pytest.raises(RuntimeError):
            create_app("production", {"DATABASE_URL": "sqlite:///:memory:"})
        storage.dispose()


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    body = res.get_json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert "timestamp" in body


def test_api_docs_document_routes(client):
    res = client.get("/swagger.json")
    assert res.status_code == 200
    paths = res.get_json()["paths"]
    assert "/api/users/login" in paths
    assert "/api/customers/{customer_id}" in paths


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.get_json()["docs"] == "/apidocs/"


class TestIntegrityErrors:
    def test_unique_violation_is_conflict(self, app, client):
        @app.post("/duplicate-users")
        def duplicate_users():
            for _ in range(2):
                storage.new(User(full_name="Dup", email="dup@example.com", password_hash="x"))
            storage.save()
            return {"success": True}, 201

        res = client.post("/duplicate-users")
        assert res.status_code == 409
        error = res.get_json()["error"]
        assert error["code"] == "CONFLICT"
        assert error["message"] == "Unique constraint violated."
        assert "users.email" in error["meta"]["db_error"]
        assert storage.count(User) == 0

    def test_foreign_key_violation_is_bad_request(self, app, client):
        @app.post("/orphan-customer")
        def orphan_customer():
            storage.new(Customer(user_id=str(uuid.uuid4()), full_name="Orphan"))
            storage.save()
            return {"success": True}, 201

        res = client.post("/orphan-customer")
        assert res.status_code == 400
        error = res.get_json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert error["message"] == "Foreign key constraint failed."
        assert storage.count(Customer) == 0
