"""
Registration form - state and submit flow for creating an account.

Holds the four controlled inputs, the two password visibility toggles,
per-field errors and the loading flag, and drives POST /register through
an ApiClient. Rendering is left to the caller: field_error(),
password_input_type, submit_label and submit_disabled expose everything a
view needs.

Password/confirmation equality is not checked here; the server reports a
mismatch as a password field error.
"""

import logging
from dataclasses import asdict, dataclass, field

from tolet.client.alerts import Alert, Alerter, ConsoleAlerter
from tolet.client.api import (
    ApiClient,
    ApiResult,
    ApiSuccess,
    NetworkFailure,
    ServerFailure,
    ValidationFailure,
)
from tolet.client.navigation import HistoryNavigator, Navigator
from tolet.client.session import ClientSession
from tolet.client.storage import JsonFileStorage, Storage
from tolet.config.settings import ClientSettings, get_client_settings

logger = logging.getLogger(__name__)

REGISTER_PATH = "/register"
LOGIN_ROUTE = "/login"

SUCCESS_ALERT = Alert(
    icon="success",
    title="Registration Successful!",
    text="Your account has been created successfully.",
    confirm_button_text="Go to Login",
)
NETWORK_ERROR_ALERT = Alert(
    icon="error",
    title="Network Error!",
    text="Unable to connect. Please try again later.",
)
DEFAULT_FAILURE_MESSAGE = "Registration failed"


@dataclass
class RegistrationFields:
    name: str = ""
    email: str = ""
    password: str = ""
    password_confirmation: str = ""


@dataclass
class RegistrationForm:
    """
    Client-side registration form.

    errors is replaced wholesale on every submission: a server field-error
    mapping on 422, empty otherwise. loading is True only while a request
    is in flight.
    """

    api: ApiClient
    storage: Storage
    alerter: Alerter
    navigator: Navigator
    fields: RegistrationFields = field(default_factory=RegistrationFields)
    errors: dict[str, list[str]] = field(default_factory=dict)
    loading: bool = False
    show_password: bool = False
    show_confirm_password: bool = False

    def change(self, name: str, value: str) -> None:
        """Update one input, like an onChange handler keyed by input name."""
        if name not in RegistrationFields.__dataclass_fields__:
            raise ValueError(f"Unknown registration field: {name}")
        setattr(self.fields, name, value)

    def toggle_password_visibility(self) -> None:
        self.show_password = not self.show_password

    def toggle_confirm_password_visibility(self) -> None:
        self.show_confirm_password = not self.show_confirm_password

    @property
    def password_input_type(self) -> str:
        return "text" if self.show_password else "password"

    @property
    def confirm_password_input_type(self) -> str:
        return "text" if self.show_confirm_password else "password"

    @property
    def submit_label(self) -> str:
        return "Registering..." if self.loading else "Register"

    @property
    def submit_disabled(self) -> bool:
        return self.loading

    def field_error(self, name: str) -> str | None:
        """First error message for a field, as rendered under its input."""
        messages = self.errors.get(name)
        return messages[0] if messages else None

    @property
    def general_error(self) -> str | None:
        return self.field_error("general")

    def payload(self) -> dict[str, str]:
        return asdict(self.fields)

    def submit(self) -> ApiResult | None:
        """
        Submit the form to the registration endpoint.

        Returns the API result, or None if a submission is already in flight.
        """
        if self.loading:
            return None

        self.errors = {}
        self.loading = True
        try:
            result = self.api.post(REGISTER_PATH, self.payload())
            if isinstance(result, ApiSuccess):
                self._on_success(result)
            elif isinstance(result, ValidationFailure):
                self.errors = dict(result.errors)
            elif isinstance(result, ServerFailure):
                self._alert_failure(result.message)
            elif isinstance(result, NetworkFailure):
                self.alerter.fire(NETWORK_ERROR_ALERT)
            return result
        finally:
            self.loading = False

    def _alert_failure(self, message: str | None) -> None:
        self.alerter.fire(
            Alert(
                icon="error",
                title="Registration Failed!",
                text=message or DEFAULT_FAILURE_MESSAGE,
            )
        )

    def _on_success(self, result: ApiSuccess) -> None:
        token = result.data.get("token")
        user = result.data.get("user")
        if not isinstance(token, str) or not token:
            logger.error("Registration response had status %s but no token", result.status_code)
            self._alert_failure(None)
            return

        session = self.api.session
        session.set_credentials(token, user if isinstance(user, dict) else None)
        session.persist(self.storage)
        logger.info("Registration succeeded, session stored")

        self.alerter.fire(SUCCESS_ALERT)
        self.navigator.navigate(LOGIN_ROUTE)


def build_registration_form(
    settings: ClientSettings | None = None,
    alerter: Alerter | None = None,
    navigator: Navigator | None = None,
) -> RegistrationForm:
    """
    Wire a form to file-backed storage and an HTTP client from settings.

    Any session already in storage is restored onto the client.
    """
    settings = settings or get_client_settings()
    storage = JsonFileStorage(settings.storage_path)
    api = ApiClient.from_settings(settings, session=ClientSession.restore(storage))
    return RegistrationForm(
        api=api,
        storage=storage,
        alerter=alerter or ConsoleAlerter(),
        navigator=navigator or HistoryNavigator(),
    )
