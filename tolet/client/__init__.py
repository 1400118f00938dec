"""
Client package - Python counterpart of the single-page frontend.

Talks to the API over HTTP, keeps the bearer credential on an explicit
session object and persists it to client storage.
"""

from .alerts import Alert, Alerter, ConsoleAlerter
from .api import ApiClient, ApiResult, ApiSuccess, NetworkFailure, ServerFailure, ValidationFailure
from .navigation import HistoryNavigator, Navigator
from .registration_form import RegistrationForm, build_registration_form
from .session import ClientSession
from .storage import JsonFileStorage, MemoryStorage, Storage

__all__ = [
    "Alert",
    "Alerter",
    "ApiClient",
    "ApiResult",
    "ApiSuccess",
    "ClientSession",
    "ConsoleAlerter",
    "HistoryNavigator",
    "JsonFileStorage",
    "MemoryStorage",
    "NetworkFailure",
    "Navigator",
    "RegistrationForm",
    "ServerFailure",
    "Storage",
    "ValidationFailure",
    "build_registration_form",
]
