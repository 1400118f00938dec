"""
Unit tests for API request/response models.

Tests Pydantic model validation for the registration and login endpoints.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from tolet.api.models import LoginRequest, RegisterRequest, UserResponse
from tolet.domain.ports import User


def register(**overrides: object) -> RegisterRequest:
    data = {
        "name": "Ana",
        "email": "ana@x.com",
        "password": "secret1",
        "password_confirmation": "secret1",
    }
    data.update(overrides)
    return RegisterRequest(**data)


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_valid_register_request(self) -> None:
        request = register()
        assert request.name == "Ana"
        assert request.email == "ana@x.com"
        assert request.password == "secret1"

    def test_name_is_stripped(self) -> None:
        assert register(name="  Ana  ").name == "Ana"

    def test_email_is_stripped(self) -> None:
        assert register(email="  ana@x.com ").email == "ana@x.com"

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            register(name="   ")

    def test_name_of_255_chars_accepted(self) -> None:
        assert len(register(name="a" * 255).name) == 255

    def test_name_of_256_chars_rejected(self) -> None:
        with pytest.raises(ValidationError):
            register(name="a" * 256)

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            register(email="bad-email")
        assert "email" in str(exc_info.value)

    def test_password_exactly_6_chars(self) -> None:
        assert register(password="abcdef", password_confirmation="abcdef").password == "abcdef"

    def test_password_too_short(self) -> None:
        with pytest.raises(ValidationError):
            register(password="abc", password_confirmation="abc")

    def test_confirmation_not_checked_by_schema(self) -> None:
        """Equality is checked by the registration validator, not the model."""
        assert register(password_confirmation="secret2").password_confirmation == "secret2"

    def test_display_name_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            register(email="Bob <bob@x.com>")
        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_angle_bracket_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            register(email="<bob@x.com>")


class TestLoginRequest:
    def test_valid_login_request(self) -> None:
        request = LoginRequest(email="ana@x.com", password="secret1")
        assert request.email == "ana@x.com"

    def test_empty_password_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoginRequest(email="ana@x.com", password="")

    def test_display_name_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoginRequest(email="Ana <ana@x.com>", password="secret1")


class TestUserResponse:
    def test_built_from_domain_user_without_password(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        user = User(
            id=1,
            name="Ana",
            email="ana@x.com",
            password_hash="$2b$04$hash",
            created_at=now,
            updated_at=now,
        )
        dumped = UserResponse.model_validate(user).model_dump()

        assert dumped["id"] == 1
        assert dumped["email"] == "ana@x.com"
        assert "password_hash" not in dumped
        assert "password" not in dumped
