"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Validation failures raised here are translated into per-field messages by
tolet.api.errors.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _bare_email(value: Any) -> Any:
    """Strip an email and reject the "Name <addr>" display form EmailStr would accept."""
    value = _strip(value)
    if isinstance(value, str) and ("<" in value or ">" in value):
        raise ValueError("value is not a bare email address")
    return value


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: NameStr = Field(..., description="Display name (max 255 characters)")
    email: EmailStr
    password: str = Field(..., min_length=6, description="User password (min 6 characters)")
    # Compared against password in tolet.api.validation, independently of the other fields
    password_confirmation: Any = Field(None, description="Must equal password")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _bare_email(value)


class LoginRequest(BaseModel):
    """Request model for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _bare_email(value)


class UserResponse(BaseModel):
    """Public representation of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Response model for successful registration or login."""

    status: bool = True
    message: str
    user: UserResponse
    token: str


class MessageResponse(BaseModel):
    """Standard error response model."""

    message: str


class ValidationErrorResponse(BaseModel):
    """Response model for 422 field validation failures."""

    message: str
    errors: dict[str, list[str]]
