"""Pydantic schema for the raw transaction payload returned at login.

Every field is optional and lenient: a value of the wrong shape validates to
``None`` instead of raising, so the normalizer only ever deals with present or
absent values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)


def _none_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return None


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


Number = Annotated[Optional[float], WrapValidator(_none_on_error)]
Text = Annotated[Optional[str], AfterValidator(_blank_to_none), WrapValidator(_none_on_error)]


class _Lenient(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        allow_inf_nan=False,
        coerce_numbers_to_str=True,
    )


class Fee(_Lenient):
    platform_sharing_revenue: Number = None
    mdr_qris: Number = None


class PaymentDetail(_Lenient):
    transaction_id: Text = None
    transaction_status: Text = None
    transaction_time: Text = None
    order_id: Text = None
    issuer: Text = None


class Payment(_Lenient):
    amount: Number = None
    method: Text = None
    nett: Number = None
    fee: Annotated[Optional[Fee], WrapValidator(_none_on_error)] = None
    detail: Annotated[Optional[PaymentDetail], WrapValidator(_none_on_error)] = None


class Product(_Lenient):
    name: Text = None
    device_id: Text = None
    price: Number = None
    location: Text = None
    sku: Text = None


class TransactionDetail(_Lenient):
    transaction_status: Text = None
    order_id: Text = None


class FirestoreTimestamp(_Lenient):
    seconds: Number = Field(default=None, alias="_seconds")
    nanoseconds: Number = Field(default=None, alias="_nanoseconds")


class TransactionTime(_Lenient):
    firestore_timestamp: Annotated[Optional[FirestoreTimestamp], WrapValidator(_none_on_error)] = None
    timestamp: Number = None


class RawTransaction(_Lenient):
    """One transaction record as received from the login endpoint."""

    product: Annotated[Optional[Product], WrapValidator(_none_on_error)] = None
    payment: Annotated[Optional[Payment], WrapValidator(_none_on_error)] = None
    detail: Annotated[Optional[TransactionDetail], WrapValidator(_none_on_error)] = None
    time: Annotated[Optional[TransactionTime], WrapValidator(_none_on_error)] = None


def parse_raw_transaction(value: Any) -> RawTransaction:
    """Validate one payload entry; anything that is not a mapping is empty."""

    if isinstance(value, RawTransaction):
        return value
    if not isinstance(value, Mapping):
        return RawTransaction()
    return RawTransaction.model_validate({str(key): item for key, item in value.items()})
