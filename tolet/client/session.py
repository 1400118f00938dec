"""
Client session - the bearer credential attached to outgoing API calls.

Each ApiClient owns one ClientSession, so independent clients (and tests)
never share credentials through module-level state.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from tolet.client.storage import AUTH_TOKEN_KEY, USER_KEY, Storage


@dataclass
class ClientSession:
    """Bearer token and the user it belongs to."""

    auth_token: str | None = None
    user: dict[str, Any] | None = field(default=None)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    def authorization_headers(self) -> dict[str, str]:
        """Headers to send with every request; empty when anonymous."""
        if not self.auth_token:
            return {}
        return {"Authorization": f"Bearer {self.auth_token}"}

    def set_credentials(self, auth_token: str, user: dict[str, Any] | None = None) -> None:
        self.auth_token = auth_token
        self.user = user

    def persist(self, storage: Storage) -> None:
        """Write auth_token and the JSON-serialized user to storage."""
        if self.auth_token is not None:
            storage.set_item(AUTH_TOKEN_KEY, self.auth_token)
        if self.user is not None:
            storage.set_item(USER_KEY, json.dumps(self.user))

    @classmethod
    def restore(cls, storage: Storage) -> "ClientSession":
        """Rebuild a session from storage. Unparseable user data is dropped."""
        user_raw = storage.get_item(USER_KEY)
        user = None
        if user_raw is not None:
            try:
                parsed = json.loads(user_raw)
            except json.JSONDecodeError:
                parsed = None
            user = parsed if isinstance(parsed, dict) else None
        return cls(auth_token=storage.get_item(AUTH_TOKEN_KEY), user=user)
