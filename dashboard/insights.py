"""Aggregation helpers feeding the dashboard charts and detail view."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypedDict

import numpy as np
import pandas as pd

from . import utils


class CategoryCount(TypedDict):
    name: str
    count: int
    color: str


class AmountSeries(TypedDict):
    labels: list[str]
    values: list[float]


DETAIL_FIELDS: dict[str, str] = {
    "id": "ID Transaksi",
    "product_name": "Nama Produk",
    "product_device_id": "Device ID",
    "product_price": "Harga",
    "product_location": "Lokasi",
    "product_sku": "SKU",
    "payment_amount": "Jumlah",
    "payment_method": "Metode Pembayaran",
    "payment_nett": "Nett",
    "transaction_id": "Transaction ID",
    "transaction_status": "Status Transaksi",
    "transaction_time": "Waktu Transaksi",
    "order_id": "Order ID",
    "issuer": "Issuer",
}


def _random_color(rng: np.random.Generator) -> str:
    return f"#{int(rng.integers(0, 0xFFFFFF + 1)):06x}"


def count_by_category(
    rows: pd.DataFrame,
    column: str = "payment_method",
    *,
    rng: np.random.Generator | None = None,
) -> list[CategoryCount]:
    """Count rows per distinct ``column`` value in first-seen order.

    Colours are cosmetic and drawn at random unless ``rng`` is seeded.
    """

    df = utils.ensure_dataframe(rows)
    if df.empty:
        return []

    rng = rng or np.random.default_rng()
    counts = df.groupby(column, sort=False, dropna=False).size()
    return [
        {
            "name": utils.cell_text(name),
            "count": int(count),
            "color": _random_color(rng),
        }
        for name, count in counts.items()
    ]


def amount_series(rows: pd.DataFrame) -> AmountSeries:
    """Return product labels and payment amounts in row order."""

    df = utils.ensure_dataframe(rows)
    if df.empty:
        return {"labels": [], "values": []}

    return {
        "labels": [str(label) for label in df["product_name"]],
        "values": [float(value) for value in df["payment_amount"]],
    }


def detail_fields(row: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Labelled field/value pairs for the transaction detail view."""

    return [(label, utils.cell_text(row.get(key))) for key, label in DETAIL_FIELDS.items()]
