"""
Alerts - modal acknowledgments shown to the user.

An Alerter's fire() returns only once the user has dismissed the alert,
which is what lets the registration form wait before navigating.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

BRAND_COLOR = "#e45716"


@dataclass(frozen=True)
class Alert:
    icon: Literal["success", "error", "warning", "info"]
    title: str
    text: str
    confirm_button_text: str = "OK"
    confirm_button_color: str = BRAND_COLOR


class Alerter(Protocol):
    """Port interface for showing an alert and waiting for dismissal."""

    def fire(self, alert: Alert) -> None: ...


class ConsoleAlerter:
    """
    Implements Alerter protocol via logging.

    For headless use - the alert is dismissed as soon as it is logged.
    """

    def fire(self, alert: Alert) -> None:
        level = logging.ERROR if alert.icon == "error" else logging.INFO
        logger.log(level, "[ALERT] %s %s [%s]", alert.title, alert.text, alert.confirm_button_text)
