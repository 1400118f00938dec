"""
API routes - Account endpoints.

This module defines the HTTP endpoints:
- POST /register - Create a user and issue a bearer token
- POST /login - Exchange credentials for a new bearer token
- GET /user - Return the user owning the bearer token
"""

from fastapi import APIRouter, Depends, status

from tolet.api.dependencies import (
    get_authentication_service,
    get_current_user,
    get_registration_service,
)
from tolet.api.errors import FieldValidationError
from tolet.api.models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
    ValidationErrorResponse,
)
from tolet.api.validation import EMAIL_TAKEN_MESSAGE, validated_registration
from tolet.domain.authentication import AuthenticationService
from tolet.domain.exceptions import EmailAlreadyRegistered, InvalidCredentials
from tolet.domain.ports import User
from tolet.domain.registration import RegistrationService

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ValidationErrorResponse, "description": "Validation error"}},
    summary="Register a new user",
    description="Create an account and receive a bearer token. "
    "The plaintext token is only returned in this response.",
)
def register(
    request_data: RegisterRequest = Depends(validated_registration),
    service: RegistrationService = Depends(get_registration_service),
) -> AuthResponse:
    """
    Register a new user.

    - **name**: Display name (max 255 characters)
    - **email**: Unique, valid email address
    - **password**: Password (minimum 6 characters)
    - **password_confirmation**: Must equal password
    """
    try:
        user, issued = service.register(request_data.name, request_data.email, request_data.password)
    except EmailAlreadyRegistered:
        # lost a race with a concurrent registration after validation passed
        raise FieldValidationError({"email": [EMAIL_TAKEN_MESSAGE]}) from None
    return AuthResponse(
        message="Registration successful",
        user=UserResponse.model_validate(user),
        token=issued.plain_text,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={422: {"model": ValidationErrorResponse, "description": "Invalid credentials"}},
    summary="Log in",
)
def login(
    request_data: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> AuthResponse:
    """Verify credentials and issue a new bearer token."""
    try:
        user, issued = service.login(request_data.email, request_data.password)
    except InvalidCredentials:
        raise FieldValidationError({"email": ["The provided credentials are incorrect."]}) from None
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=issued.plain_text,
    )


@router.get(
    "/user",
    response_model=UserResponse,
    responses={401: {"model": MessageResponse, "description": "Missing or invalid token"}},
    summary="Current user",
)
def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
