"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tolet.config.settings import get_settings
from tolet.domain.authentication import AuthenticationService
from tolet.domain.exceptions import InvalidToken
from tolet.domain.ports import User, UserRepository
from tolet.domain.registration import RegistrationService


def get_repository(request: Request) -> UserRepository:
    """
    Get the user repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_registration_service(request: Request) -> RegistrationService:
    """Create registration service wired to the repository and security settings."""
    settings = get_settings()
    return RegistrationService(
        repository=get_repository(request),
        bcrypt_cost=settings.bcrypt_cost,
        token_name=settings.token_name,
    )


def get_authentication_service(request: Request) -> AuthenticationService:
    settings = get_settings()
    return AuthenticationService(repository=get_repository(request), token_name=settings.token_name)


# Bearer security scheme for OpenAPI documentation; missing headers are handled below
http_bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    service: AuthenticationService = Depends(get_authentication_service),
) -> User:
    """
    Resolve the Authorization: Bearer header to a user.

    Raises 401 for a missing, malformed, or unknown token.
    """
    unauthenticated = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthenticated.",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthenticated
    try:
        return service.authenticate(credentials.credentials)
    except InvalidToken:
        raise unauthenticated from None
