"""Synthetic login payloads for demos, scripts and tests.

The generator produces deterministic vending transactions shaped like the
login endpoint's response body, including the gaps seen in real data: records
without fee data, without payment detail, with status only at the top level,
and with unusable timestamps.
"""

from __future__ import annotations

import json
import string
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

DEFAULT_ROWS = 120
DEFAULT_SEED = 7

START_SECONDS = int(datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp())
SPAN_SECONDS = 180 * 24 * 60 * 60

DOC_ID_ALPHABET = string.ascii_letters + string.digits
PAYMENT_METHODS = ("QRIS", "CASH", "GOPAY", "OVO")
PAYMENT_WEIGHTS = (0.6, 0.25, 0.1, 0.05)
STATUSES = ("SUCCESS", "PENDING", "FAILED")
STATUS_WEIGHTS = (0.85, 0.1, 0.05)
ISSUERS = ("BCA", "MANDIRI", "BRI", "BNI", "GOPAY", "OVO")

MDR_QRIS_RATE = 0.007
PLATFORM_SHARE_RATE = 0.01


@dataclass(frozen=True)
class ProductProfile:
    """Static metadata for a vended product."""

    name: str
    sku: str
    price: int


@dataclass(frozen=True)
class DeviceProfile:
    device_id: str
    location: str


PRODUCTS = (
    ProductProfile("Air Mineral 600ml", "SKU-AM600", 5_000),
    ProductProfile("Kopi Susu", "SKU-KS250", 12_000),
    ProductProfile("Teh Botol", "SKU-TB350", 7_000),
    ProductProfile("Roti Coklat", "SKU-RC001", 9_000),
    ProductProfile("Keripik Kentang", "SKU-KK068", 11_000),
    ProductProfile("Jus Jeruk", "SKU-JJ300", 15_000),
)

DEVICES = (
    DeviceProfile("VM-JKT-001", "Stasiun Sudirman"),
    DeviceProfile("VM-JKT-002", "Mall Kota Kasablanka"),
    DeviceProfile("VM-BDG-001", "Kampus ITB"),
    DeviceProfile("VM-SBY-001", "Bandara Juanda"),
)

# Probability of each data gap per generated record.
GAP_RATES = {
    "no_fee": 0.15,
    "no_payment_detail": 0.05,
    "no_product_name": 0.03,
    "bad_timestamp": 0.03,
}


def _doc_id(rng: np.random.Generator, length: int = 20) -> str:
    picks = rng.integers(0, len(DOC_ID_ALPHABET), size=length)
    return "".join(DOC_ID_ALPHABET[i] for i in picks)


def _choice(rng: np.random.Generator, options: tuple[str, ...], weights: tuple[float, ...]) -> str:
    return str(rng.choice(options, p=np.asarray(weights) / sum(weights)))


def _build_transaction(rng: np.random.Generator, sequence: int) -> dict[str, Any]:
    product = PRODUCTS[int(rng.integers(0, len(PRODUCTS)))]
    device = DEVICES[int(rng.integers(0, len(DEVICES)))]
    method = _choice(rng, PAYMENT_METHODS, PAYMENT_WEIGHTS)
    status = _choice(rng, STATUSES, STATUS_WEIGHTS)

    seconds = START_SECONDS + int(rng.integers(0, SPAN_SECONDS))
    order_id = f"ORD-{seconds}-{sequence:05d}"
    amount = product.price

    fee: dict[str, float] | None = None
    nett = float(amount)
    if method != "CASH":
        mdr = round(amount * MDR_QRIS_RATE, 2)
        share = round(amount * PLATFORM_SHARE_RATE, 2)
        fee = {"mdr_qris": mdr, "platform_sharing_revenue": share}
        nett = round(amount - mdr - share, 2)

    record: dict[str, Any] = {
        "product": {
            "name": product.name,
            "device_id": device.device_id,
            "price": product.price,
            "location": device.location,
            "sku": product.sku,
            "quantity": 1,
        },
        "payment": {
            "amount": amount,
            "method": method,
            "nett": nett,
            "detail": {
                "transaction_id": _doc_id(rng, 12).upper(),
                "transaction_status": status,
                "transaction_time": datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
                "order_id": order_id,
                "issuer": "CASH" if method == "CASH" else str(rng.choice(ISSUERS)),
            },
        },
        "detail": {"transaction_status": status, "order_id": order_id},
        "time": {
            "firestore_timestamp": {"_seconds": seconds, "_nanoseconds": int(rng.integers(0, 1_000_000_000))},
            "timestamp": seconds * 1000,
        },
    }
    if fee is not None:
        record["payment"]["fee"] = fee

    if rng.random() < GAP_RATES["no_fee"]:
        record["payment"].pop("fee", None)
    if rng.random() < GAP_RATES["no_payment_detail"]:
        record["payment"].pop("detail")
    if rng.random() < GAP_RATES["no_product_name"]:
        record["product"].pop("name")
    if rng.random() < GAP_RATES["bad_timestamp"]:
        record["time"]["firestore_timestamp"]["_seconds"] = None

    return record


def generate_transactions(rows: int = DEFAULT_ROWS, *, seed: int | None = DEFAULT_SEED) -> dict[str, dict[str, Any]]:
    """Return ``rows`` raw transactions keyed by document id."""

    if rows <= 0:
        raise ValueError("rows must be positive")

    rng = np.random.default_rng(seed)
    transactions: dict[str, dict[str, Any]] = {}
    sequence = 0
    while len(transactions) < rows:
        transactions.setdefault(_doc_id(rng), _build_transaction(rng, sequence))
        sequence += 1
    return transactions


def generate_payload(rows: int = DEFAULT_ROWS, *, seed: int | None = DEFAULT_SEED) -> dict[str, Any]:
    """Return a full login response body."""

    return {"data": generate_transactions(rows, seed=seed), "message": "Login berhasil"}


def write_payload(path: str | Path, *, rows: int = DEFAULT_ROWS, seed: int | None = DEFAULT_SEED) -> Path:
    """Persist a synthetic payload as JSON."""

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(generate_payload(rows, seed=seed), indent=2), encoding="utf-8")
    return output_path
