"""Login boundary and in-memory session store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import requests

from .config import Settings
from .logging_setup import get_logger

logger = get_logger(__name__)

MIN_USERNAME_LENGTH = 4
MIN_PASSWORD_LENGTH = 6

EMPTY_CREDENTIALS_MESSAGE = "Username dan Password tidak boleh kosong."
SHORT_USERNAME_MESSAGE = f"Username harus minimal {MIN_USERNAME_LENGTH} karakter."
SHORT_PASSWORD_MESSAGE = f"Password harus minimal {MIN_PASSWORD_LENGTH} karakter."
LOGIN_FAILED_MESSAGE = "Login gagal. Periksa kembali username dan password."


class CredentialsError(ValueError):
    """Input rejected before any network call."""


class LoginError(RuntimeError):
    """The login endpoint could not be reached or refused the request."""


class SessionStore:
    """Holds the authenticated payload for one browser session.

    The store is owned by the caller and handed to whatever needs the data;
    nothing in the package keeps a module-level session.
    """

    def __init__(self) -> None:
        self._payload: dict[str, Any] | None = None

    @property
    def payload(self) -> dict[str, Any] | None:
        return self._payload

    @property
    def is_authenticated(self) -> bool:
        return self._payload is not None

    @property
    def transactions(self) -> Mapping[str, Any]:
        data = (self._payload or {}).get("data")
        return data if isinstance(data, Mapping) else {}

    def login(self, payload: Mapping[str, Any]) -> None:
        self._payload = dict(payload)

    def logout(self) -> None:
        # Purely local; the login endpoint keeps no server-side session.
        self._payload = None


def validate_credentials(username: str, password: str) -> str | None:
    """Return the first validation message that applies, or ``None``."""

    if not username or not password:
        return EMPTY_CREDENTIALS_MESSAGE
    if len(username) < MIN_USERNAME_LENGTH:
        return SHORT_USERNAME_MESSAGE
    if len(password) < MIN_PASSWORD_LENGTH:
        return SHORT_PASSWORD_MESSAGE
    return None


def request_login(
    username: str,
    password: str,
    *,
    url: str,
    timeout: float | None = None,
    http: Any = requests,
) -> dict[str, Any]:
    """POST the credentials and return the decoded response body."""

    try:
        response = http.post(url, json={"username": username, "password": password}, timeout=timeout)
        response.raise_for_status()
        body = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Login request to %s failed: %s", url, type(exc).__name__)
        raise LoginError(LOGIN_FAILED_MESSAGE) from exc

    if not isinstance(body, Mapping):
        logger.warning("Login response from %s is not a JSON object", url)
        raise LoginError(LOGIN_FAILED_MESSAGE)
    return dict(body)


def login(
    store: SessionStore,
    username: str,
    password: str,
    *,
    settings: Settings,
    http: Any = requests,
) -> SessionStore:
    """Validate, authenticate and populate ``store``.

    ``store`` is only touched on success, so a failed attempt leaves any
    earlier session as it was.
    """

    message = validate_credentials(username, password)
    if message:
        raise CredentialsError(message)

    logger.info("Login attempt for user %s", username)
    payload = request_login(
        username,
        password,
        url=settings.login_url,
        timeout=settings.login_timeout,
        http=http,
    )
    store.login(payload)
    logger.info("Login succeeded for user %s (%d transactions)", username, len(store.transactions))
    return store


def logout(store: SessionStore) -> None:
    store.logout()
    logger.info("Session cleared")
