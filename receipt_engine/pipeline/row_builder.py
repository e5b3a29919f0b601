"""
Canonical row construction.

The on-screen list and the exported document are both rendered from the
tuple returned by build_rows, so row order and values cannot drift between
them. Optional fields that did not resolve are left out entirely.
"""

from typing import Any, Optional

from receipt_engine.models.enums import Category
from receipt_engine.pipeline.formatters import (
    as_text,
    format_amount_with_symbol,
    format_display_date,
    is_present,
    mask_middle,
    resolve_explorer_url,
)
from receipt_engine.schemas.envelope import Envelope
from receipt_engine.schemas.receipt import CanonicalRow, MergedDetail, SwapInfo

WITHDRAWAL_DISPLAY_CURRENCY = "NGN"


def _row(
    label: str,
    value: Any,
    copyable: Any = None,
    external_link: Optional[str] = None,
) -> CanonicalRow:
    return CanonicalRow(
        label=label,
        value=value if isinstance(value, str) else as_text(value),
        copyable=str(copyable) if is_present(copyable) else None,
        external_link=external_link,
    )


def _add(rows: list[CanonicalRow], label: str, value: Any, **actions: Any) -> None:
    """Append a row only when its value resolved."""
    if is_present(value):
        rows.append(_row(label, value, **actions))


def _swap_leg(amount: Any, currency: Optional[str]) -> Optional[str]:
    if is_present(amount):
        return format_amount_with_symbol(amount, currency)
    return currency or None


def _common_rows(envelope: Envelope) -> list[CanonicalRow]:
    date = envelope.date if is_present(envelope.date) else format_display_date(envelope.created_at)
    return [
        _row("Type", as_text(envelope.type)),
        _row("Date", as_text(date)),
    ]


def _withdrawal_rows(merged: MergedDetail) -> list[CanonicalRow]:
    rows: list[CanonicalRow] = []
    _add(rows, "Reference", merged.withdrawal_reference, copyable=merged.withdrawal_reference)
    _add(rows, "Bank Name", merged.bank_name)
    _add(rows, "Account Name", merged.account_name)
    _add(rows, "Account Number", merged.account_number, copyable=merged.account_number)
    if is_present(merged.amount_sent_to_bank):
        rows.append(_row(
            "Sent to Bank",
            format_amount_with_symbol(merged.amount_sent_to_bank, WITHDRAWAL_DISPLAY_CURRENCY),
        ))
    if is_present(merged.withdrawal_fee):
        rows.append(_row(
            "Withdrawal Fee",
            format_amount_with_symbol(merged.withdrawal_fee, WITHDRAWAL_DISPLAY_CURRENCY),
        ))
    _add(rows, "Currency", merged.currency)
    return rows


def _swap_rows(merged: MergedDetail) -> list[CanonicalRow]:
    swap = merged.swap or SwapInfo()
    rows: list[CanonicalRow] = []
    _add(rows, "From", _swap_leg(swap.from_amount, swap.from_currency or merged.currency))
    _add(rows, "To", _swap_leg(swap.to_amount, swap.to_currency))
    return rows


def _token_rows(merged: MergedDetail) -> list[CanonicalRow]:
    rows: list[CanonicalRow] = []
    if merged.is_swap:
        rows.extend(_swap_rows(merged))
    else:
        _add(rows, "Transaction ID", merged.transaction_id, copyable=merged.transaction_id)
        if is_present(merged.address):
            rows.append(_row("Address", mask_middle(merged.address), copyable=merged.address))
        _add(rows, "Narration", merged.narration)

    _add(rows, "Currency", merged.currency)
    _add(rows, "Network", merged.network)
    if is_present(merged.hash):
        rows.append(_row(
            "Hash",
            mask_middle(merged.hash),
            copyable=merged.hash,
            external_link=resolve_explorer_url(merged.raw_network, merged.hash),
        ))
    _add(rows, "Fee", merged.fee)
    return rows


def _utility_rows(merged: MergedDetail) -> list[CanonicalRow]:
    rows: list[CanonicalRow] = []
    _add(rows, "Order ID", merged.order_id, copyable=merged.order_id)
    _add(rows, "Product", merged.product_name)
    _add(rows, "Quantity", merged.quantity)
    _add(rows, "Network", merged.network)
    _add(rows, "Customer", merged.customer_info)
    _add(rows, "Bill Type", merged.bill_type)
    _add(rows, "Pay Currency", merged.payment_currency)
    return rows


CATEGORY_ROWS = {
    Category.WITHDRAWAL: _withdrawal_rows,
    Category.TOKEN: _token_rows,
    Category.UTILITY: _utility_rows,
}


def build_rows(
    envelope: Envelope,
    merged: MergedDetail,
    category: Category,
) -> tuple[CanonicalRow, ...]:
    """Ordered canonical rows for one receipt. Deterministic for fixed inputs."""
    rows = _common_rows(envelope)
    rows.extend(CATEGORY_ROWS[category](merged))
    return tuple(rows)
