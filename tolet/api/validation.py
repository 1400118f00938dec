"""
Registration request validation.

Every rule runs for every field and all violations come back in one 422,
the way a form-request validator behaves: the RegisterRequest schema rules,
the password confirmation check, and an email uniqueness lookup.

The lookup only gives the user a complete error list. The repository's
unique insert is still what stops two concurrent registrations.
"""

from typing import Any

from fastapi import Body, Depends
from pydantic import ValidationError

from tolet.api.dependencies import get_repository
from tolet.api.errors import FieldValidationError, translate_validation_errors
from tolet.api.models import RegisterRequest
from tolet.domain.authentication import normalize_email
from tolet.domain.ports import UserRepository

CONFIRMATION_MISMATCH_MESSAGE = "The password confirmation does not match."
EMAIL_TAKEN_MESSAGE = "The email has already been taken."


def _add(errors: dict[str, list[str]], field: str, message: str) -> None:
    messages = errors.setdefault(field, [])
    if message not in messages:
        messages.append(message)


def collect_registration_errors(
    payload: dict[str, Any], repository: UserRepository
) -> tuple[RegisterRequest | None, dict[str, list[str]]]:
    """
    Validate a registration payload.

    Returns:
        Tuple of (parsed request or None, field -> messages). The request is
        None whenever a schema rule failed.
    """
    request = None
    errors: dict[str, list[str]] = {}
    try:
        request = RegisterRequest.model_validate(payload)
    except ValidationError as e:
        errors = translate_validation_errors(e.errors())

    # confirmation is only compared once a password was given
    password = payload.get("password")
    if isinstance(password, str) and password != "" and payload.get("password_confirmation") != password:
        _add(errors, "password", CONFIRMATION_MISMATCH_MESSAGE)

    email = payload.get("email")
    if "email" not in errors and isinstance(email, str):
        if repository.find_user_by_email(normalize_email(email)) is not None:
            _add(errors, "email", EMAIL_TAKEN_MESSAGE)

    return request, errors


def validated_registration(
    payload: dict[str, Any] = Body(..., description="name, email, password, password_confirmation"),
    repository: UserRepository = Depends(get_repository),
) -> RegisterRequest:
    """Dependency yielding a fully validated RegisterRequest or raising a 422."""
    request, errors = collect_registration_errors(payload, repository)
    if request is None or errors:
        raise FieldValidationError(errors)
    return request
