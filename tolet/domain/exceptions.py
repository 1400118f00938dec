"""
Domain exceptions - Semantic error types for accounts.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class AccountError(Exception):
    """Base class for account domain errors."""

    pass


class EmailAlreadyRegistered(AccountError):
    """Email is already used by an existing user."""

    pass


class InvalidCredentials(AccountError):
    """Email/password pair does not match any user."""

    pass


class InvalidToken(AccountError):
    """Bearer token is malformed or unknown."""

    pass
