"""Tests for credential validation, the login call and the session store."""

from __future__ import annotations

from typing import Any

import pytest
import requests
from dashboard import auth
from dashboard.config import Settings

SETTINGS = Settings(login_url="https://login.example.test", login_timeout=5.0)
PAYLOAD = {"data": {"t1": {"payment": {"amount": 100}}}, "message": "ok"}


class _StubResponse:
    def __init__(self, status: int = 200, body: Any = None, *, bad_json: bool = False) -> None:
        self.status_code = status
        self._body = body
        self._bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        if self._bad_json:
            raise ValueError("not json")
        return self._body


class _StubHttp:
    def __init__(self, response: _StubResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> _StubResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def test_validation_messages_are_checked_in_order() -> None:
    assert auth.validate_credentials("", "") == auth.EMPTY_CREDENTIALS_MESSAGE
    assert auth.validate_credentials("abc", "") == auth.EMPTY_CREDENTIALS_MESSAGE
    assert auth.validate_credentials("abc", "secret1") == auth.SHORT_USERNAME_MESSAGE
    assert auth.validate_credentials("abc", "123") == auth.SHORT_USERNAME_MESSAGE
    assert auth.validate_credentials("abcd", "12345") == auth.SHORT_PASSWORD_MESSAGE
    assert auth.validate_credentials("abcd", "123456") is None


def test_short_username_blocks_network_call() -> None:
    http = _StubHttp(_StubResponse(body=PAYLOAD))
    store = auth.SessionStore()

    with pytest.raises(auth.CredentialsError) as excinfo:
        auth.login(store, "abc", "secret123", settings=SETTINGS, http=http)

    assert str(excinfo.value) == auth.SHORT_USERNAME_MESSAGE
    assert http.calls == []
    assert not store.is_authenticated


def test_successful_login_populates_store() -> None:
    http = _StubHttp(_StubResponse(body=PAYLOAD))
    store = auth.SessionStore()

    auth.login(store, "kasir01", "rahasia1", settings=SETTINGS, http=http)

    assert http.calls == [
        {
            "url": SETTINGS.login_url,
            "json": {"username": "kasir01", "password": "rahasia1"},
            "timeout": SETTINGS.login_timeout,
        }
    ]
    assert store.is_authenticated
    assert store.payload == PAYLOAD
    assert list(store.transactions) == ["t1"]


@pytest.mark.parametrize(
    "http",
    [
        _StubHttp(error=requests.ConnectionError("unreachable")),
        _StubHttp(error=requests.Timeout("slow")),
        _StubHttp(_StubResponse(status=401, body={"message": "denied"})),
        _StubHttp(_StubResponse(status=500, body=None)),
        _StubHttp(_StubResponse(bad_json=True)),
        _StubHttp(_StubResponse(body=["not", "an", "object"])),
    ],
)
def test_any_failure_gives_one_message_and_keeps_session(http: _StubHttp) -> None:
    store = auth.SessionStore()
    store.login({"data": {"old": {}}})

    with pytest.raises(auth.LoginError) as excinfo:
        auth.login(store, "kasir01", "rahasia1", settings=SETTINGS, http=http)

    assert str(excinfo.value) == auth.LOGIN_FAILED_MESSAGE
    assert list(store.transactions) == ["old"]


def test_login_replaces_previous_payload_and_logout_clears() -> None:
    store = auth.SessionStore()
    store.login({"data": {"old": {}}})

    auth.login(store, "kasir01", "rahasia1", settings=SETTINGS, http=_StubHttp(_StubResponse(body=PAYLOAD)))
    assert list(store.transactions) == ["t1"]

    auth.logout(store)
    assert not store.is_authenticated
    assert store.payload is None
    assert store.transactions == {}


def test_transactions_tolerates_payload_without_data() -> None:
    store = auth.SessionStore()
    store.login({"message": "ok", "data": "unexpected"})

    assert store.is_authenticated
    assert store.transactions == {}
