"""Validates the parsed model response and builds PaymentSlipFields."""

from typing import Any

from slipstage.extraction.exceptions import ExtractionValidationError
from slipstage.extraction.models import PaymentSlipFields

_TEXT_FIELDS: dict[str, str] = {
    "transferFromWhom": "transfer_from_whom",
    "transferToWhom": "transfer_to_whom",
    "transferFromAccountNo": "transfer_from_account_no",
    "transferToAccountNo": "transfer_to_account_no",
    "transferDateTime": "transfer_date_time",
    "transactionID": "transaction_id",
    "transferReceiptMemo": "transfer_receipt_memo",
}


def validate_and_build(data: dict[str, Any]) -> PaymentSlipFields:
    """Validate the response keys and value types.

    Raises:
        ExtractionValidationError: on a missing key or a wrongly typed value.
    """
    for key in (*_TEXT_FIELDS, "amount"):
        if key not in data:
            raise ExtractionValidationError(f"Missing required field: {key}")

    values: dict[str, Any] = {}
    for key, attribute in _TEXT_FIELDS.items():
        values[attribute] = _build_text(data[key], key)
    values["amount"] = _build_amount(data["amount"])
    return PaymentSlipFields(**values)


def _build_text(raw: Any, key: str) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    if not isinstance(raw, str):
        raise ExtractionValidationError(f"'{key}' must be a string or null")
    return raw.strip() or None


def _build_amount(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ExtractionValidationError("'amount' must be an integer or null")
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if not isinstance(raw, int):
        raise ExtractionValidationError("'amount' must be an integer or null")
    if raw < 0:
        raise ExtractionValidationError(f"'amount' must not be negative, got {raw}")
    return raw
