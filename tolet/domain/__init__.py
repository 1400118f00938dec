"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account rules of the to-let application:
registration, login, and bearer token resolution. It defines its own port
interface for persistence, keeping adapters swappable.
"""

from .authentication import AuthenticationService, issue_token, normalize_email
from .exceptions import AccountError, EmailAlreadyRegistered, InvalidCredentials, InvalidToken
from .ports import IssuedToken, StoredToken, User, UserRepository
from .registration import RegistrationService

__all__ = [
    "AccountError",
    "AuthenticationService",
    "EmailAlreadyRegistered",
    "InvalidCredentials",
    "InvalidToken",
    "IssuedToken",
    "RegistrationService",
    "StoredToken",
    "User",
    "UserRepository",
    "issue_token",
    "normalize_email",
]
