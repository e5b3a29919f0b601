"""
Canonical receipt schemas.
MergedDetail is built once per receipt and both renderers consume the same
CanonicalRow tuple derived from it.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from receipt_engine.models.enums import Category, StatusTone


class SwapInfo(BaseModel):
    """Both legs of a swap. Amounts stay raw; formatting happens per row."""
    model_config = ConfigDict(frozen=True)

    from_amount: Optional[Any] = None
    from_currency: Optional[str] = None
    to_amount: Optional[Any] = None
    to_currency: Optional[str] = None


class MergedDetail(BaseModel):
    """
    The fully-resolved record for one receipt.

    Display-ready where a formatter applies at merge time (network), raw
    where the value is formatted per row (amounts, fees).
    """
    model_config = ConfigDict(frozen=True)

    category: Category
    is_swap: bool = False

    # token
    transaction_id: Optional[Any] = None
    currency: Optional[str] = None
    network: Optional[str] = None           # prettified
    raw_network: Optional[str] = None       # as received, for explorer lookup
    address: Optional[Any] = None
    hash: Optional[Any] = None
    fee: Optional[Any] = None
    narration: Optional[Any] = None
    swap: Optional[SwapInfo] = None

    # utility
    order_id: Optional[Any] = None
    request_id: Optional[Any] = None
    product_name: Optional[Any] = None
    quantity: Optional[Any] = None
    customer_info: Optional[Any] = None
    bill_type: Optional[Any] = None
    payment_currency: Optional[Any] = None

    # withdrawal
    withdrawal_reference: Optional[Any] = None
    bank_name: Optional[Any] = None
    account_name: Optional[Any] = None
    account_number: Optional[Any] = None
    amount_sent_to_bank: Optional[Any] = None
    withdrawal_fee: Optional[Any] = None


class CanonicalRow(BaseModel):
    """
    One (label, value, actions) unit.

    copyable: the full value placed on the clipboard (value may be masked).
    external_link: explorer URL opened through the link opener.
    """
    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    copyable: Optional[str] = None
    external_link: Optional[str] = None


class ReceiptSummary(BaseModel):
    """Envelope fields shown around the row table."""
    model_config = ConfigDict(frozen=True)

    title: str
    amount: str
    status: str
    status_tone: StatusTone


class RenderedDocument(BaseModel):
    """A stand-alone receipt document plus the rows it was rendered from."""
    model_config = ConfigDict(frozen=True)

    receipt_id: str
    title: str
    html: str
    text_summary: str
    rows: tuple[CanonicalRow, ...]
    summary: ReceiptSummary
    generated_at: datetime


class ReceiptView(BaseModel):
    """Everything a receipt screen needs once the envelope parsed."""
    model_config = ConfigDict(frozen=True)

    receipt_id: str
    category: Category
    summary: ReceiptSummary
    merged: MergedDetail
    rows: tuple[CanonicalRow, ...]


class ReceiptScreen(BaseModel):
    """Screen state: a receipt, or the explicit no-transaction state."""
    model_config = ConfigDict(frozen=True)

    available: bool
    message: Optional[str] = None
    view: Optional[ReceiptView] = None
