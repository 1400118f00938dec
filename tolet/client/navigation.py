"""Navigation - client-side route changes."""

from typing import Protocol


class Navigator(Protocol):
    def navigate(self, path: str) -> None: ...


class HistoryNavigator:
    """Implements Navigator protocol by recording visited paths."""

    def __init__(self, initial_path: str = "/") -> None:
        self.history: list[str] = [initial_path]

    @property
    def current_path(self) -> str:
        return self.history[-1]

    def navigate(self, path: str) -> None:
        self.history.append(path)
