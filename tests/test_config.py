"""Tests for settings lookup and logger namespacing."""

from __future__ import annotations

import pytest
from dashboard import config, normalize
from dashboard.logging_setup import get_logger

KEYS = (
    "DASHBOARD_LOGIN_URL",
    "DASHBOARD_LOGIN_TIMEOUT",
    "DASHBOARD_PAGE_SIZE",
    "DASHBOARD_TIMEZONE",
    "DASHBOARD_PDF_FILENAME",
    "DASHBOARD_EXCEL_FILENAME",
    "DASHBOARD_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_secrets_or_environment() -> None:
    settings = config.load_settings(lookup=lambda key: None)
    assert settings == config.Settings()
    assert settings.page_size == 10
    assert settings.pdf_filename == "report.pdf"
    assert settings.excel_filename == "report.xlsx"


def test_secrets_take_precedence_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_LOGIN_URL", "https://env.example.test")
    monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "25")
    secrets = {"DASHBOARD_LOGIN_URL": "https://secret.example.test"}

    settings = config.load_settings(lookup=secrets.get)

    assert settings.login_url == "https://secret.example.test"
    assert settings.page_size == 25


def test_invalid_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "0")
    monkeypatch.setenv("DASHBOARD_LOGIN_TIMEOUT", "soon")

    settings = config.load_settings(lookup=lambda key: None)

    assert settings.page_size == config.DEFAULT_PAGE_SIZE
    assert settings.login_timeout == config.DEFAULT_LOGIN_TIMEOUT


def test_unknown_timezone_falls_back_to_default() -> None:
    settings = config.load_settings(lookup={"DASHBOARD_TIMEZONE": "Mars/Olympus"}.get)
    assert settings.timezone == config.DEFAULT_TIMEZONE

    payload = {"data": {"t1": {"time": {"firestore_timestamp": {"_seconds": 1_700_000_000}}}}}
    frame = normalize.normalize_payload(payload, settings.timezone)
    assert frame.loc[0, "date"] == "15 Nov 2023"


def test_valid_timezone_is_kept(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "UTC")
    assert config.load_settings(lookup=lambda key: None).timezone == "UTC"


def test_timezone_default_matches_normalizer() -> None:
    assert config.Settings().timezone == normalize.DEFAULT_TIMEZONE


def test_get_logger_stays_under_package_namespace() -> None:
    assert get_logger("dashboard.view").name == "dashboard.view"
    assert get_logger("app").name == "dashboard.app"
    assert get_logger().name == "dashboard"
