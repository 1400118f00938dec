"""
In-memory repository adapter - Implements UserRepository protocol.

Used by the "memory" storage backend for local development and by the
test suite. A single lock stands in for the database's UNIQUE constraint
so concurrent create_user calls for one email cannot both succeed.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone

from tolet.domain.ports import StoredToken, User


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserRepository:
    """Implements UserRepository protocol with dicts guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[int, User] = {}
        self._user_ids_by_email: dict[str, int] = {}
        self._tokens: dict[int, StoredToken] = {}
        self._next_user_id = 1
        self._next_token_id = 1

    def create_user(self, name: str, email: str, password_hash: str) -> User | None:
        with self._lock:
            if email in self._user_ids_by_email:
                return None
            now = _utc_now()
            user = User(
                id=self._next_user_id,
                name=name,
                email=email,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            self._next_user_id += 1
            self._users[user.id] = user
            self._user_ids_by_email[email] = user.id
            return user

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def find_user_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._user_ids_by_email.get(email)
            return self._users.get(user_id) if user_id is not None else None

    def create_token(self, user_id: int, name: str, token_hash: str) -> StoredToken:
        with self._lock:
            token = StoredToken(
                id=self._next_token_id,
                user_id=user_id,
                name=name,
                token_hash=token_hash,
                created_at=_utc_now(),
            )
            self._next_token_id += 1
            self._tokens[token.id] = token
            return token

    def find_token(self, token_id: int) -> StoredToken | None:
        with self._lock:
            return self._tokens.get(token_id)

    def touch_token(self, token_id: int) -> None:
        with self._lock:
            token = self._tokens.get(token_id)
            if token is not None:
                self._tokens[token_id] = replace(token, last_used_at=_utc_now())

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    def count_tokens(self) -> int:
        with self._lock:
            return len(self._tokens)
