"""Shared utilities for the transactions dashboard."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

import pandas as pd


def ensure_dataframe(rows: Iterable[Mapping] | pd.DataFrame) -> pd.DataFrame:
    """Ensure the input rows are normalised to a :class:`pandas.DataFrame`."""

    if isinstance(rows, pd.DataFrame):
        return rows.copy()

    return pd.DataFrame(list(rows))


def is_missing(value: Any) -> bool:
    """Return ``True`` for ``None``, ``pd.NA`` and NaN-like scalars."""

    if value is None or value is pd.NA:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    return False


def cell_text(value: Any) -> str:
    """Render a table cell the way it reads on screen.

    Integral floats drop their ``.0`` and missing values render empty, so
    substring filters match what the user sees.
    """

    if is_missing(value):
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_currency(value: float, currency: str = "Rp") -> str:
    """Return a human-readable Rupiah string using dot thousands separators."""

    return f"{currency} {value:,.0f}".replace(",", ".")
