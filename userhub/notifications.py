"""Notifier implementations for account lifecycle messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from .errors import NotificationError

if TYPE_CHECKING:  # pragma: no cover
    from .config import Settings
    from .ports import Notifier

logger = logging.getLogger("userhub.notifications")

WELCOME = "welcome"
DEACTIVATION = "deactivation"
REACTIVATION = "reactivation"


class LoggingNotifier:
    """Record notifications in the application log instead of delivering them."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def send_welcome(self, email: str, name: str) -> None:
        self._logger.info("Welcome message for %s <%s>", name, email)

    def send_deactivation(self, email: str, name: str) -> None:
        self._logger.info("Deactivation notice for %s <%s>", name, email)

    def send_reactivation(self, email: str, name: str) -> None:
        self._logger.info("Reactivation notice for %s <%s>", name, email)


def _normalize_url(url: str) -> str:
    cleaned = (url or "").strip()
    if not cleaned:
        raise ValueError("Webhook URL must not be empty")
    return cleaned


class WebhookNotifier:
    """POST each notification as JSON to an HTTP endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = _normalize_url(url)
        self._timeout = timeout
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    def send_welcome(self, email: str, name: str) -> None:
        self._post(WELCOME, email, name)

    def send_deactivation(self, email: str, name: str) -> None:
        self._post(DEACTIVATION, email, name)

    def send_reactivation(self, email: str, name: str) -> None:
        self._post(REACTIVATION, email, name)

    def _post(self, event: str, email: str, name: str) -> None:
        payload = {"event": event, "email": email, "name": name}
        try:
            if self._client is not None:
                response = self._client.post(self._url, json=payload, timeout=self._timeout)
            else:
                response = httpx.post(self._url, json=payload, timeout=self._timeout)
        except httpx.RequestError as exc:
            raise NotificationError(f"Failed to deliver {event} notification: {exc}") from exc

        if response.status_code >= 400:
            raise NotificationError(
                f"Notification endpoint rejected {event} message with status {response.status_code}"
            )


def build_notifier(settings: "Settings") -> "Notifier":
    if settings.notifier == "webhook":
        if not settings.webhook_url:
            raise ValueError("A webhook URL is required when the webhook notifier is selected")
        return WebhookNotifier(settings.webhook_url, timeout=settings.webhook_timeout)
    return LoggingNotifier()


__all__ = [
    "DEACTIVATION",
    "LoggingNotifier",
    "REACTIVATION",
    "WELCOME",
    "WebhookNotifier",
    "build_notifier",
]
