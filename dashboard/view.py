"""Filtering and pagination of normalized transaction rows."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Mapping

import pandas as pd

from . import utils
from .config import DEFAULT_PAGE_SIZE

GLOBAL_FILTER_COLUMNS = ("product_name", "payment_method", "transaction_status")

VISIBLE_COLUMNS: dict[str, str] = {
    "id": "ID Transaksi",
    "product_name": "Nama Produk",
    "payment_amount": "Jumlah",
    "payment_method": "Metode Pembayaran",
    "transaction_status": "Status Transaksi",
    "date": "Tanggal",
}


@dataclass(frozen=True)
class FilterState:
    global_filter: str = ""
    column_filters: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return bool(self.global_filter) or any(self.column_filters.values())

    def apply(self, frame: pd.DataFrame) -> pd.DataFrame:
        return filter_rows(frame, self.global_filter, self.column_filters)


def _contains(series: pd.Series, needle: str) -> pd.Series:
    folded = needle.casefold()
    return pd.Series(
        [folded in utils.cell_text(value).casefold() for value in series],
        index=series.index,
        dtype=bool,
    )


def filter_rows(
    frame: pd.DataFrame,
    global_filter: str = "",
    column_filters: Mapping[str, str] | None = None,
) -> pd.DataFrame:
    """Apply the global filter AND every column filter, keeping row order.

    The global filter matches when any of :data:`GLOBAL_FILTER_COLUMNS`
    contains it; empty filters match everything.
    """

    mask = pd.Series(True, index=frame.index, dtype=bool)

    if global_filter:
        any_match = pd.Series(False, index=frame.index, dtype=bool)
        for column in GLOBAL_FILTER_COLUMNS:
            any_match |= _contains(frame[column], global_filter)
        mask &= any_match

    for column, needle in (column_filters or {}).items():
        if column not in frame.columns:
            raise ValueError(f"Unknown filter column: {column!r}")
        if needle:
            mask &= _contains(frame[column], needle)

    return frame.loc[mask].reset_index(drop=True)


def page_count(total: int, size: int) -> int:
    """Number of pages for ``total`` rows; an empty set still has one page."""

    if size < 1:
        raise ValueError("page size must be positive")
    return max(1, math.ceil(total / size))


def clamp_page_index(index: int, total: int, size: int) -> int:
    return min(max(index, 0), page_count(total, size) - 1)


def paginate(frame: pd.DataFrame, index: int, size: int) -> pd.DataFrame:
    """Return rows ``[index * size, index * size + size)``.

    An index past the last page yields an empty frame.
    """

    if size < 1:
        raise ValueError("page size must be positive")
    if index < 0:
        raise ValueError("page index must not be negative")
    start = index * size
    return frame.iloc[start:start + size]


@dataclass(frozen=True)
class PageState:
    index: int = 0
    size: int = DEFAULT_PAGE_SIZE

    @property
    def has_previous(self) -> bool:
        return self.index > 0

    def has_next(self, total: int) -> bool:
        return (self.index + 1) * self.size < total

    def next(self, total: int) -> PageState:
        if not self.has_next(total):
            return self
        return replace(self, index=self.index + 1)

    def previous(self) -> PageState:
        return replace(self, index=max(self.index - 1, 0))

    def clamp(self, total: int) -> PageState:
        return replace(self, index=clamp_page_index(self.index, total, self.size))

    def slice(self, frame: pd.DataFrame) -> pd.DataFrame:
        return paginate(frame, self.index, self.size)
