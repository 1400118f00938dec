"""
Client storage - persistent string key/value store.

Mirrors the browser's localStorage contract (string keys, string values)
so the registration flow can persist the session the same way a web
frontend does. JsonFileStorage survives process restarts; MemoryStorage
is for tests and throwaway sessions.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "auth_token"
USER_KEY = "user"


class Storage(Protocol):
    """Port interface for client-side key/value persistence."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Implements Storage protocol with a plain dict."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """
    Implements Storage protocol backed by a JSON object on disk.

    Every write rewrites the file through a temporary file and an atomic
    rename, so a crash never leaves a half-written store behind.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt client storage file: %s", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)
