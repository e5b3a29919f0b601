"""
Field resolution across the envelope, detail payload and raw backend payload.

The same logical field arrives under different names depending on which
backend call produced the transaction. A lookup walks the sources in a fixed
order and stops at the first present value:

    envelope (exact name) → detail (exact name) → raw (exact name) → raw (dotted path)

Nothing here raises; an unresolved field is None.
"""

from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from receipt_engine.pipeline.formatters import is_present

PATH_SEPARATOR = "."

Lookup = Callable[[], Optional[Any]]


# ─── Candidate name tables ────────────────────────────────────
# Order within a list matters only inside a single source.

TOKEN_FIELDS = {
    "transaction_id": ["transactionId", "txId", "externalId", "reference", "id", "_id"],
    "currency": ["currency", "symbol", "asset"],
    "network": ["network", "chain", "blockchain"],
    "address": ["address", "walletAddress", "to", "toAddress", "receivingAddress"],
    "hash": ["hash", "txHash", "transactionHash"],
    "fee": ["fee", "networkFee", "gasFee", "txFee"],
    "narration": ["narration", "note", "description", "memo", "reason"],
}

UTILITY_FIELDS = {
    "order_id": ["orderId", "order_id"],
    "request_id": ["requestId", "request_id"],
    "product_name": ["productName", "product"],
    "quantity": ["quantity", "units"],
    "network": ["network", "chain", "blockchain"],
    "customer_info": ["customerInfo", "customerPhone", "phone", "meterNo", "account"],
    "bill_type": ["billType", "type"],
    "payment_currency": ["paymentCurrency"],
}

WITHDRAWAL_FIELDS = {
    "currency": ["currency", "symbol", "asset"],
    "withdrawal_reference": [
        "withdrawalReference", "reference", "ref", "txRef",
        "transactionReference", "receiptData.reference",
    ],
    "bank_name": [
        "bankName", "bank", "bankDetails.name", "destinationBank",
        "beneficiaryBank", "receiptData.bankName",
    ],
    "account_name": [
        "accountName", "accountHolderName", "beneficiaryName",
        "recipientName", "receiptData.accountName",
    ],
    "account_number": [
        "accountNumber", "accountNo", "beneficiaryAccount", "account",
        "receiptData.accountNumber",
    ],
    "amount_sent_to_bank": [
        "amountSentToBank", "bankAmount", "netAmount", "settlementAmount",
        "receiptData.amountSentToBank",
    ],
    "withdrawal_fee": [
        "withdrawalFee", "fee", "charges", "transactionFee",
        "receiptData.withdrawalFee",
    ],
}

SWAP_FALLBACK_FIELDS = {
    "to_currency": ["toCurrency", "toSymbol", "toAsset"],
    "to_amount": ["toAmount", "amountOut", "received"],
}


# ─── Lookups ──────────────────────────────────────────────────

def _flat_lookup(source: Optional[Mapping], names: Iterable[str]) -> Optional[Any]:
    if not isinstance(source, Mapping):
        return None
    for name in names:
        value = source.get(name)
        if is_present(value):
            return value
    return None


def _walk_path(source: Mapping, path: str) -> Optional[Any]:
    node: Any = source
    for segment in path.split(PATH_SEPARATOR):
        if not isinstance(node, Mapping):
            return None
        node = node.get(segment)
        if node is None:
            return None
    return node


def _dotted_lookup(source: Optional[Mapping], names: Iterable[str]) -> Optional[Any]:
    if not isinstance(source, Mapping):
        return None
    for name in names:
        if PATH_SEPARATOR not in name:
            continue
        value = _walk_path(source, name)
        if is_present(value):
            return value
    return None


def resolve(
    envelope: Optional[Mapping],
    detail: Optional[Mapping],
    raw: Optional[Mapping],
    candidate_names: list[str],
) -> Optional[Any]:
    """
    Return the first present value for any of candidate_names.

    Sources are consulted lazily in priority order; later sources are never
    touched once an earlier one yields.
    """
    lookups: tuple[Lookup, ...] = (
        lambda: _flat_lookup(envelope, candidate_names),
        lambda: _flat_lookup(detail, candidate_names),
        lambda: _flat_lookup(raw, candidate_names),
        lambda: _dotted_lookup(raw, candidate_names),
    )
    for lookup in lookups:
        value = lookup()
        if value is not None:
            return value
    return None


def resolve_all(
    envelope: Optional[Mapping],
    detail: Optional[Mapping],
    raw: Optional[Mapping],
    table: dict[str, list[str]],
) -> dict[str, Any]:
    """Resolve every field of a candidate table. Unresolved fields map to None."""
    return {
        field: resolve(envelope, detail, raw, names)
        for field, names in table.items()
    }
