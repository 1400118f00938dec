"""
API client - httpx wrapper returning tagged results.

Every call resolves to exactly one of:

- ApiSuccess: 2xx response with its JSON payload
- ValidationFailure: 422 with a field -> messages mapping
- ServerFailure: any other 4xx/5xx, with the server's "message" if present
- NetworkFailure: the server could not be reached at all

Callers branch on the result type instead of inspecting exceptions and
response shapes. Nothing is retried.
"""

import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx

from tolet.client.session import ClientSession
from tolet.config.settings import ClientSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiSuccess:
    status_code: int
    data: dict[str, Any]


@dataclass(frozen=True)
class ValidationFailure:
    status_code: int
    errors: dict[str, list[str]]
    message: str | None = None


@dataclass(frozen=True)
class ServerFailure:
    status_code: int
    message: str | None = None


@dataclass(frozen=True)
class NetworkFailure:
    reason: str = ""


ApiResult = Union[ApiSuccess, ValidationFailure, ServerFailure, NetworkFailure]


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _field_errors(raw: Any) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        return {}
    errors: dict[str, list[str]] = {}
    for key, value in raw.items():
        if isinstance(value, list):
            errors[str(key)] = [str(item) for item in value]
        else:
            errors[str(key)] = [str(value)]
    return errors


def classify_response(response: httpx.Response) -> ApiResult:
    """Map an HTTP response onto the result taxonomy."""
    body = _json_body(response)
    if response.status_code == 422:
        return ValidationFailure(
            status_code=response.status_code,
            errors=_field_errors(body.get("errors")),
            message=body.get("message"),
        )
    if response.is_error:
        message = body.get("message")
        return ServerFailure(
            status_code=response.status_code,
            message=message if isinstance(message, str) else None,
        )
    return ApiSuccess(status_code=response.status_code, data=body)


class ApiClient:
    """
    Shared API wrapper for one client instance.

    The bearer credential lives on self.session; every request sends
    session.authorization_headers() alongside the JSON accept header.
    """

    def __init__(self, http: httpx.Client, session: ClientSession | None = None) -> None:
        self._http = http
        self.session = session if session is not None else ClientSession()

    @classmethod
    def from_settings(cls, settings: ClientSettings, session: ClientSession | None = None) -> "ApiClient":
        http = httpx.Client(base_url=settings.api_base_url, timeout=settings.timeout_seconds)
        return cls(http, session=session)

    def set_bearer_token(self, token: str) -> None:
        """Attach a bearer token to every subsequent call from this client."""
        self.session.auth_token = token

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json", **self.session.authorization_headers()}

    def request(self, method: str, path: str, json: dict[str, Any] | None = None) -> ApiResult:
        try:
            response = self._http.request(method, path, json=json, headers=self._headers())
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            return NetworkFailure(reason=str(e))
        return classify_response(response)

    def get(self, path: str) -> ApiResult:
        return self.request("GET", path)

    def post(self, path: str, json: dict[str, Any]) -> ApiResult:
        return self.request("POST", path, json=json)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
