"""
Integration tests for the assembled FastAPI application.

Runs tolet.api.main.app with the memory storage backend so the lifespan,
middleware and exception handlers are exercised without a database.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from tolet.api import main
from tolet.config.settings import Settings


@pytest.fixture
def app_client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setattr(
        main, "get_settings", lambda: Settings(storage_backend="memory", bcrypt_cost=4)
    )
    with TestClient(main.app, raise_server_exceptions=False) as client:
        yield client


class TestLifespan:
    def test_health_with_memory_backend(self, app_client: TestClient) -> None:
        response = app_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_register_and_fetch_user(self, app_client: TestClient) -> None:
        response = app_client.post(
            "/register",
            json={
                "name": "Ana",
                "email": "ana@x.com",
                "password": "secret1",
                "password_confirmation": "secret1",
            },
        )
        assert response.status_code == 201

        token = response.json()["token"]
        me = app_client.get("/user", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["email"] == "ana@x.com"


class TestErrorEnvelope:
    def test_unknown_route_has_message(self, app_client: TestClient) -> None:
        response = app_client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

    def test_wrong_method_has_message(self, app_client: TestClient) -> None:
        response = app_client.get("/register")

        assert response.status_code == 405
        assert "message" in response.json()

    def test_unexpected_error_returns_500_message(
        self, app_client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        repository = main.app.state.repository

        def explode(*args: object) -> None:
            raise RuntimeError("disk on fire")

        repository.create_user = explode

        response = app_client.post(
            "/register",
            json={
                "name": "Ana",
                "email": "ana@x.com",
                "password": "secret1",
                "password_confirmation": "secret1",
            },
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Server Error"}
        assert "Unhandled error on POST /register" in caplog.text

    def test_validation_error_not_logged_as_fault(
        self, app_client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        response = app_client.post("/register", json={"email": "bad-email"})

        assert response.status_code == 422
        assert "Unhandled error" not in caplog.text

    def test_cors_preflight(self, app_client: TestClient) -> None:
        response = app_client.options(
            "/register",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
