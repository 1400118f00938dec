"""
Error translation - exception handlers for the FastAPI application.

Every error response carries a "message" field. Validation failures
additionally carry "errors", a mapping of field name to ordered messages,
worded the way the frontend displays them.
"""

import logging
from collections.abc import Sequence
from typing import Any, cast

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "The given data was invalid."
GENERAL_FIELD = "general"

# Fields whose values are not trimmed before the "required" check
_UNTRIMMED_FIELDS = frozenset({"password", "password_confirmation"})


class FieldValidationError(Exception):
    """Raised by routes when a domain rule rejects input after schema validation."""

    def __init__(self, errors: dict[str, list[str]], message: str = VALIDATION_MESSAGE) -> None:
        super().__init__(message)
        self.errors = errors
        self.message = message


def _attribute(field: str) -> str:
    return field.replace("_", " ")


def _is_blank(field: str, value: Any) -> bool:
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    if field in _UNTRIMMED_FIELDS:
        return value == ""
    return value.strip() == ""


def _field_message(field: str, error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}
    attribute = _attribute(field)

    if error_type == "missing" or _is_blank(field, error.get("input")):
        return f"The {attribute} field is required."
    if error_type == "string_type":
        return f"The {attribute} must be a string."
    if error_type == "string_too_long":
        return f"The {attribute} must not be greater than {ctx.get('max_length')} characters."
    if error_type == "string_too_short":
        return f"The {attribute} must be at least {ctx.get('min_length')} characters."
    if field == "email":
        return "The email must be a valid email address."
    return f"The {attribute} is invalid."


def translate_validation_errors(errors: Sequence[dict[str, Any]]) -> dict[str, list[str]]:
    """
    Convert pydantic error dicts into a field -> messages mapping.

    Errors without a field location (malformed or non-object body) are
    attached to "general".
    """
    translated: dict[str, list[str]] = {}

    for error in errors:
        loc = [part for part in error.get("loc", ()) if part != "body"]
        error_type = error.get("type", "")

        if loc and isinstance(loc[0], str):
            field = loc[0]
            message = _field_message(field, error)
        elif error_type == "json_invalid":
            field, message = GENERAL_FIELD, "The request body must be valid JSON."
        else:
            field, message = GENERAL_FIELD, "The request body must be a JSON object."

        messages = translated.setdefault(field, [])
        if message not in messages:
            messages.append(message)

    return translated


def _validation_response(errors: dict[str, list[str]], message: str = VALIDATION_MESSAGE) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": message, "errors": errors},
    )


def request_validation_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _validation_response(translate_validation_errors(validation_exc.errors()))


def field_validation_handler(_: Request, exc: Exception) -> JSONResponse:
    field_exc = cast(FieldValidationError, exc)
    return _validation_response(field_exc.errors, field_exc.message)


def http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    detail = http_exc.detail
    message = detail if isinstance(detail, str) else "Request failed"
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"message": message},
        headers=getattr(http_exc, "headers", None),
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FieldValidationError, field_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
