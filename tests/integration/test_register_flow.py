"""
Integration tests for the registration flow.

Drives the client-side RegistrationForm against the real API routes over
FastAPI's TestClient, with the in-memory repository behind them.
"""

import json
from unittest.mock import Mock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tolet.adapters.repository.memory import InMemoryUserRepository
from tolet.client.api import ApiClient, ApiSuccess, NetworkFailure, ValidationFailure
from tolet.client.navigation import HistoryNavigator
from tolet.client.registration_form import NETWORK_ERROR_ALERT, SUCCESS_ALERT, RegistrationForm
from tolet.client.storage import MemoryStorage


@pytest.fixture
def form(app: FastAPI) -> RegistrationForm:
    return RegistrationForm(
        api=ApiClient(TestClient(app)),
        storage=MemoryStorage(),
        alerter=Mock(),
        navigator=HistoryNavigator("/register"),
    )


def fill(form: RegistrationForm, **overrides: str) -> None:
    values = {
        "name": "Ana",
        "email": "ana@x.com",
        "password": "secret1",
        "password_confirmation": "secret1",
    }
    values.update(overrides)
    for name, value in values.items():
        form.change(name, value)


class TestSuccessfulRegistration:
    def test_full_registration_flow(
        self, form: RegistrationForm, repository: InMemoryUserRepository, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Server returns 201, client stores session and navigates to /login."""
        fill(form)

        result = form.submit()

        assert isinstance(result, ApiSuccess)
        assert result.status_code == 201
        token = result.data["token"]
        assert token

        assert form.storage.get_item("auth_token") == token
        assert json.loads(form.storage.get_item("user"))["email"] == "ana@x.com"
        assert form.navigator.current_path == "/login"
        form.alerter.fire.assert_called_once_with(SUCCESS_ALERT)
        assert repository.count_users() == 1
        # plaintext token never reaches the logs
        assert token not in caplog.text

    def test_stored_token_authenticates_next_call(self, form: RegistrationForm) -> None:
        fill(form)
        form.submit()

        me = form.api.get("/user")

        assert isinstance(me, ApiSuccess)
        assert me.data["email"] == "ana@x.com"


class TestFailedRegistration:
    def test_invalid_email_rendered_under_field(
        self, form: RegistrationForm, repository: InMemoryUserRepository
    ) -> None:
        fill(form, email="bad-email")

        result = form.submit()

        assert isinstance(result, ValidationFailure)
        assert form.errors == {"email": ["The email must be a valid email address."]}
        assert form.field_error("email") == "The email must be a valid email address."
        assert form.navigator.current_path == "/register"
        assert form.storage.get_item("auth_token") is None
        assert repository.count_users() == 0

    def test_duplicate_email_from_second_form(self, app: FastAPI, form: RegistrationForm) -> None:
        fill(form)
        form.submit()

        other = RegistrationForm(
            api=ApiClient(TestClient(app)),
            storage=MemoryStorage(),
            alerter=Mock(),
            navigator=HistoryNavigator("/register"),
        )
        fill(other, name="Another Ana")
        other.submit()

        assert other.field_error("email") == "The email has already been taken."
        assert other.api.session.auth_token is None

    def test_password_mismatch_shown_on_password(self, form: RegistrationForm) -> None:
        fill(form, password_confirmation="secret2")

        form.submit()

        assert form.field_error("password") == "The password confirmation does not match."

    def test_same_invalid_submit_twice(self, form: RegistrationForm, repository: InMemoryUserRepository) -> None:
        fill(form, email="bad-email", password="abc")

        form.submit()
        first = dict(form.errors)
        form.submit()

        assert form.errors == first
        assert repository.count_users() == 0

    def test_unreachable_server(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        form = RegistrationForm(
            api=ApiClient(httpx.Client(transport=httpx.MockTransport(refuse), base_url="http://api.test")),
            storage=MemoryStorage(),
            alerter=Mock(),
            navigator=HistoryNavigator("/register"),
        )
        fill(form)

        result = form.submit()

        assert isinstance(result, NetworkFailure)
        form.alerter.fire.assert_called_once_with(NETWORK_ERROR_ALERT)
        assert form.loading is False
