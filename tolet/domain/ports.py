"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the records the domain works with and the interface
(port) it requires from persistence. Adapters implement the protocol.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class User:
    """
    Persisted user account.

    password_hash is kept on the record for credential checks but is
    never part of any serialized representation.
    """

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class StoredToken:
    """Personal access token row. Only the SHA-256 digest of the secret is stored."""

    id: int
    user_id: int
    name: str
    token_hash: str
    created_at: datetime
    last_used_at: datetime | None = None


@dataclass(frozen=True)
class IssuedToken:
    """Freshly minted token. plain_text is only available at issue time."""

    token: StoredToken
    plain_text: str


class UserRepository(Protocol):
    """Port interface for user and token persistence."""

    def create_user(self, name: str, email: str, password_hash: str) -> User | None:
        """
        Atomically insert a new user.

        Args:
            name: Display name
            email: Normalized email address
            password_hash: bcrypt hashed password

        Returns:
            The created User, or None if the email is already registered.
            Uniqueness must be guaranteed by the store, not by a prior lookup.
        """
        ...

    def get_user(self, user_id: int) -> User | None:
        """Fetch a user by id."""
        ...

    def find_user_by_email(self, email: str) -> User | None:
        """Fetch a user by normalized email address."""
        ...

    def create_token(self, user_id: int, name: str, token_hash: str) -> StoredToken:
        """
        Insert a personal access token for a user.

        Args:
            user_id: Owner of the token
            name: Token name (e.g. "tolet_token")
            token_hash: SHA-256 hex digest of the token secret

        Returns:
            The stored token row, including its generated id
        """
        ...

    def find_token(self, token_id: int) -> StoredToken | None:
        """Fetch a token row by id."""
        ...

    def touch_token(self, token_id: int) -> None:
        """Record that a token was just used to authenticate."""
        ...
