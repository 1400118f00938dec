"""
Authentication domain service - credential checks and token issuance.

Tokens follow the personal access token scheme: the caller receives
"<id>|<secret>" once, the store only keeps sha256(secret). Looking a token
up by id and comparing digests with secrets.compare_digest keeps the check
constant-time with respect to the secret.
"""

import logging
import secrets
from dataclasses import dataclass

from .exceptions import InvalidCredentials, InvalidToken
from .ports import IssuedToken, User, UserRepository
from .tokens import (
    format_token,
    generate_token_secret,
    hash_token_secret,
    parse_token,
    verify_password,
)

logger = logging.getLogger(__name__)


def issue_token(repository: UserRepository, user: User, name: str) -> IssuedToken:
    """Mint a new personal access token for a user."""
    secret = generate_token_secret()
    stored = repository.create_token(user.id, name, hash_token_secret(secret))
    return IssuedToken(token=stored, plain_text=format_token(stored.id, secret))


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class AuthenticationService:
    """Domain service for logging in and resolving bearer tokens."""

    repository: UserRepository
    token_name: str = "tolet_token"

    def login(self, email: str, password: str) -> tuple[User, IssuedToken]:
        """
        Verify credentials and mint a new token.

        Raises:
            InvalidCredentials: If the email is unknown or the password is wrong
        """
        user = self.repository.find_user_by_email(normalize_email(email))
        # verify_password runs bcrypt even when user is None
        valid = verify_password(password, user.password_hash if user else None)
        if user is None or not valid:
            raise InvalidCredentials()

        issued = issue_token(self.repository, user, self.token_name)
        logger.info("User logged in: id=%s token_id=%s", user.id, issued.token.id)
        return user, issued

    def authenticate(self, plain_text: str) -> User:
        """
        Resolve a plaintext bearer token to its owner.

        Raises:
            InvalidToken: If the token is malformed, unknown, or its owner is gone
        """
        parsed = parse_token(plain_text)
        if parsed is None:
            raise InvalidToken()
        token_id, secret = parsed

        stored = self.repository.find_token(token_id)
        if stored is None:
            raise InvalidToken()
        if not secrets.compare_digest(stored.token_hash.encode(), hash_token_secret(secret).encode()):
            raise InvalidToken()

        user = self.repository.get_user(stored.user_id)
        if user is None:
            raise InvalidToken()

        self.repository.touch_token(stored.id)
        return user
