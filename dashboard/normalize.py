"""Normalization of the raw login payload into flat transaction rows."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Optional, TypedDict

import pandas as pd

from .logging_setup import get_logger
from .schema import (
    Fee,
    FirestoreTimestamp,
    Payment,
    PaymentDetail,
    Product,
    TransactionDetail,
    parse_raw_transaction,
)

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "Asia/Jakarta"

UNKNOWN_PRODUCT = "Tidak Diketahui"
PLACEHOLDER = "-"
NO_DATE = "Tidak ada tanggal"

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
)


class TransactionRow(TypedDict):
    id: str
    product_name: str
    product_device_id: str
    product_price: float
    product_location: str
    product_sku: str
    payment_amount: float
    payment_method: str
    payment_nett: float
    payment_fee_platform_sharing_revenue: Optional[float]
    payment_fee_mdr_qris: Optional[float]
    transaction_id: str
    transaction_status: str
    transaction_time: str
    order_id: str
    issuer: str
    date: str
    timestamp: Optional[pd.Timestamp]


ROW_COLUMNS: tuple[str, ...] = tuple(TransactionRow.__annotations__)
NUMERIC_COLUMNS = ("product_price", "payment_amount", "payment_nett")
FEE_COLUMNS = ("payment_fee_platform_sharing_revenue", "payment_fee_mdr_qris")
TEXT_COLUMNS = tuple(
    column for column in ROW_COLUMNS if column not in NUMERIC_COLUMNS + FEE_COLUMNS + ("timestamp",)
)


def parse_timestamp(seconds: Any, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp | None:
    """Convert epoch seconds to a tz-aware timestamp, or ``None`` if unusable."""

    if seconds is None or isinstance(seconds, bool):
        return None
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    try:
        stamp = pd.Timestamp(value, unit="s", tz="UTC")
    except (OverflowError, ValueError):
        return None
    return stamp.tz_convert(tz)


def format_date(stamp: pd.Timestamp | None) -> str:
    """Return ``DD Mon YYYY`` with Indonesian month names."""

    if stamp is None or pd.isna(stamp):
        return NO_DATE
    return f"{stamp.day:02d} {MONTH_ABBREVIATIONS[stamp.month - 1]} {stamp.year}"


def _text(value: str | None, default: str = PLACEHOLDER) -> str:
    return value if value is not None else default


def _number(value: float | None) -> float:
    return float(value) if value is not None else 0.0


def normalize_record(txn_id: str, raw: Any, tz: str = DEFAULT_TIMEZONE) -> TransactionRow:
    """Flatten one raw record, substituting defaults for every absent field."""

    txn = parse_raw_transaction(raw)
    product = txn.product or Product()
    payment = txn.payment or Payment()
    fee = payment.fee or Fee()
    detail = payment.detail or PaymentDetail()
    # Older records carry status and order id at the top level only.
    fallback = txn.detail or TransactionDetail()
    firestore = (txn.time.firestore_timestamp if txn.time else None) or FirestoreTimestamp()

    stamp = parse_timestamp(firestore.seconds, tz)

    return {
        "id": str(txn_id),
        "product_name": _text(product.name, UNKNOWN_PRODUCT),
        "product_device_id": _text(product.device_id),
        "product_price": _number(product.price),
        "product_location": _text(product.location),
        "product_sku": _text(product.sku),
        "payment_amount": _number(payment.amount),
        "payment_method": _text(payment.method),
        "payment_nett": _number(payment.nett),
        "payment_fee_platform_sharing_revenue": fee.platform_sharing_revenue,
        "payment_fee_mdr_qris": fee.mdr_qris,
        "transaction_id": _text(detail.transaction_id),
        "transaction_status": _text(detail.transaction_status or fallback.transaction_status),
        "transaction_time": _text(detail.transaction_time, ""),
        "order_id": _text(detail.order_id or fallback.order_id),
        "issuer": _text(detail.issuer),
        "date": format_date(stamp),
        "timestamp": stamp,
    }


def _sort_key(row: TransactionRow) -> tuple[int, int]:
    stamp = row["timestamp"]
    if stamp is None:
        # Undated rows rank below every dated row.
        return (0, 0)
    return (1, stamp.value)


def normalize_transactions(data: Any, tz: str = DEFAULT_TIMEZONE) -> list[TransactionRow]:
    """Return one row per payload key, newest first.

    Rows without a valid timestamp come last; ties keep their payload order.
    """

    if not isinstance(data, Mapping):
        return []

    rows = [normalize_record(txn_id, raw, tz) for txn_id, raw in data.items()]
    rows.sort(key=_sort_key, reverse=True)

    undated = sum(1 for row in rows if row["timestamp"] is None)
    logger.debug("Normalized %d transactions (%d without a valid date)", len(rows), undated)
    return rows


def to_frame(rows: list[TransactionRow]) -> pd.DataFrame:
    """Return the rows as a DataFrame with the fixed :data:`ROW_COLUMNS` order."""

    frame = pd.DataFrame.from_records(rows, columns=list(ROW_COLUMNS))
    for column in NUMERIC_COLUMNS:
        frame[column] = frame[column].astype(float)
    for column in FEE_COLUMNS:
        frame[column] = frame[column].astype("Float64")
    for column in TEXT_COLUMNS:
        frame[column] = frame[column].astype(object)
    return frame


def normalize_payload(payload: Any, tz: str = DEFAULT_TIMEZONE) -> pd.DataFrame:
    """Normalize the ``data`` mapping of a login response body."""

    data = payload.get("data") if isinstance(payload, Mapping) else None
    return to_frame(normalize_transactions(data, tz))
