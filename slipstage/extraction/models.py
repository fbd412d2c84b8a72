from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentSlipFields:
    """Transfer details read off a proof-of-payment image. Unclear values are None."""

    transfer_from_whom: str | None = None
    transfer_to_whom: str | None = None
    transfer_from_account_no: str | None = None
    transfer_to_account_no: str | None = None
    transfer_date_time: str | None = None
    amount: int | None = None
    transaction_id: str | None = None
    transfer_receipt_memo: str | None = None
