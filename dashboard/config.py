"""Runtime settings for the transactions dashboard.

Each key is looked up in Streamlit secrets first, then in the environment,
then falls back to the default below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import streamlit as st

from .normalize import DEFAULT_TIMEZONE

DEFAULT_LOGIN_URL = "https://login-bir3msoyja-et.a.run.app"
DEFAULT_LOGIN_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 10
DEFAULT_PDF_FILENAME = "report.pdf"
DEFAULT_EXCEL_FILENAME = "report.xlsx"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    login_url: str = DEFAULT_LOGIN_URL
    login_timeout: float = DEFAULT_LOGIN_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE
    timezone: str = DEFAULT_TIMEZONE
    pdf_filename: str = DEFAULT_PDF_FILENAME
    excel_filename: str = DEFAULT_EXCEL_FILENAME
    log_level: str = DEFAULT_LOG_LEVEL


def _secret(key: str) -> Any:
    try:
        return st.secrets.get(key)
    except Exception:
        # No secrets.toml outside a configured Streamlit deployment.
        return None


def _lookup(key: str, lookup: Callable[[str], Any] | None) -> Any:
    value = lookup(key) if lookup is not None else _secret(key)
    if value is None or value == "":
        value = os.getenv(key)
    return value


def _as_float(value: Any, default: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _as_int(value: Any, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


def _as_timezone(value: str, default: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return default
    return value


def load_settings(lookup: Callable[[str], Any] | None = None) -> Settings:
    """Build :class:`Settings` from secrets/environment.

    ``lookup`` replaces the Streamlit secrets source, which keeps tests away
    from ``st.secrets``.
    """

    def get(key: str, default: str) -> str:
        value = _lookup(key, lookup)
        return str(value).strip() if value not in (None, "") else default

    return Settings(
        login_url=get("DASHBOARD_LOGIN_URL", DEFAULT_LOGIN_URL),
        login_timeout=_as_float(_lookup("DASHBOARD_LOGIN_TIMEOUT", lookup), DEFAULT_LOGIN_TIMEOUT),
        page_size=_as_int(_lookup("DASHBOARD_PAGE_SIZE", lookup), DEFAULT_PAGE_SIZE),
        timezone=_as_timezone(get("DASHBOARD_TIMEZONE", DEFAULT_TIMEZONE), DEFAULT_TIMEZONE),
        pdf_filename=get("DASHBOARD_PDF_FILENAME", DEFAULT_PDF_FILENAME),
        excel_filename=get("DASHBOARD_EXCEL_FILENAME", DEFAULT_EXCEL_FILENAME),
        log_level=get("DASHBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
