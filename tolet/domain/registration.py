"""
Registration domain service.

Orchestrates account creation: email normalization, password hashing,
atomic user insertion, and issuing the first bearer token.

Field-level validation (required, lengths, email syntax, confirmation) is
done at the API boundary before this service is reached, so a call here
only fails on a constraint the store enforces: email uniqueness.
"""

import logging
from dataclasses import dataclass

from .authentication import issue_token, normalize_email
from .exceptions import EmailAlreadyRegistered
from .ports import IssuedToken, User, UserRepository
from .tokens import hash_password

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Creates exactly one user per successful call and returns it together
    with a freshly issued token.
    """

    repository: UserRepository
    bcrypt_cost: int = 10
    token_name: str = "tolet_token"

    def register(self, name: str, email: str, password: str) -> tuple[User, IssuedToken]:
        """
        Register a new user.

        Args:
            name: Display name
            email: User's email address (will be normalized)
            password: User's password (will be hashed)

        Returns:
            Tuple of (created user, issued token)

        Raises:
            EmailAlreadyRegistered: If email is already registered
        """
        normalized_email = normalize_email(email)
        password_hash = hash_password(password, rounds=self.bcrypt_cost)

        user = self.repository.create_user(name, normalized_email, password_hash)
        if user is None:
            raise EmailAlreadyRegistered(normalized_email)

        issued = issue_token(self.repository, user, self.token_name)
        logger.info("User registered: id=%s", user.id)
        return user, issued
