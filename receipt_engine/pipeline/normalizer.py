"""
Normalization: envelope + detail + raw payload → one MergedDetail.

The category is decided before this runs and selects both the detail
variant and the candidate-name table. Network names are prettified here;
amounts stay raw so each renderer formats the same value.
"""

import re
from collections.abc import Mapping
from typing import Any, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from receipt_engine.models.enums import Category
from receipt_engine.pipeline.field_resolver import (
    SWAP_FALLBACK_FIELDS,
    TOKEN_FIELDS,
    UTILITY_FIELDS,
    WITHDRAWAL_FIELDS,
    resolve_all,
)
from receipt_engine.pipeline.formatters import (
    is_present,
    parse_number,
    parse_swap_narration,
    pretty_network_name,
)
from receipt_engine.schemas.envelope import DetailPayload, Envelope, SwapDetails
from receipt_engine.schemas.receipt import MergedDetail, SwapInfo

logger = structlog.get_logger(__name__)

FIELD_TABLES = {
    Category.TOKEN: TOKEN_FIELDS,
    Category.UTILITY: UTILITY_FIELDS,
    Category.WITHDRAWAL: WITHDRAWAL_FIELDS,
}

SWAP_TYPE_PATTERN = re.compile(r"swap", re.IGNORECASE)

_detail_adapter = TypeAdapter(DetailPayload)


def parse_detail(category: Category, data: Optional[Mapping[str, Any]]) -> DetailPayload:
    """
    Build the detail variant for a category.

    Fields that fail validation are dropped (and logged) rather than failing
    the receipt; the remaining keys still resolve.
    """
    payload = dict(data or {})
    payload["kind"] = category.value
    try:
        return _detail_adapter.validate_python(payload)
    except ValidationError as e:
        bad_keys = {err["loc"][1] for err in e.errors() if len(err["loc"]) > 1}
        bad_keys.discard("kind")
        logger.warning(
            "detail_payload_fields_dropped",
            category=category.value,
            fields=sorted(str(k) for k in bad_keys),
        )
        cleaned = {k: v for k, v in payload.items() if k not in bad_keys}
        return _detail_adapter.validate_python(cleaned)


def is_swap_type(type_text: Optional[str]) -> bool:
    return bool(SWAP_TYPE_PATTERN.search(type_text or ""))


def _upper(value: Any) -> Optional[str]:
    return str(value).strip().upper() if is_present(value) else None


def resolve_swap(
    swap_details: Optional[SwapDetails],
    narration: Any,
    currency: Optional[str],
    envelope_source: Mapping,
    detail_source: Mapping,
    raw: Optional[Mapping],
) -> Optional[SwapInfo]:
    """
    Swap legs, most reliable source first:
    structured swapDetails → narration text → loose raw fields.
    """
    if swap_details and is_present(swap_details.from_amount) and is_present(swap_details.to_currency):
        return SwapInfo(
            from_amount=parse_number(swap_details.from_amount),
            from_currency=_upper(swap_details.from_currency),
            to_amount=parse_number(swap_details.to_amount),
            to_currency=_upper(swap_details.to_currency),
        )

    via_narration = parse_swap_narration(str(narration) if is_present(narration) else None)
    if via_narration:
        return via_narration

    fallback = resolve_all(envelope_source, detail_source, raw, SWAP_FALLBACK_FIELDS)
    from_currency = _upper(currency)
    to_currency = _upper(fallback["to_currency"])
    if not from_currency and not to_currency:
        return None
    return SwapInfo(
        from_amount=None,
        from_currency=from_currency,
        to_amount=fallback["to_amount"],
        to_currency=to_currency,
    )


def normalize(
    envelope: Envelope,
    category: Category,
    raw: Optional[Mapping[str, Any]] = None,
) -> MergedDetail:
    """Resolve every field the category renders into an immutable MergedDetail."""
    detail = parse_detail(category, envelope.details)
    envelope_source = envelope.as_source()
    detail_source = detail.model_dump(by_alias=True, exclude={"kind"})
    raw_source = raw if isinstance(raw, Mapping) else None

    fields = resolve_all(envelope_source, detail_source, raw_source, FIELD_TABLES[category])

    if "currency" in fields and is_present(fields["currency"]):
        fields["currency"] = str(fields["currency"])
    if "network" in fields and is_present(fields["network"]):
        raw_network = str(fields["network"])
        fields["raw_network"] = raw_network
        fields["network"] = pretty_network_name(raw_network)

    is_swap = category == Category.TOKEN and is_swap_type(envelope.type)
    if is_swap:
        fields["swap"] = resolve_swap(
            detail.swap_details,
            fields.get("narration"),
            fields.get("currency"),
            envelope_source,
            detail_source,
            raw_source,
        )

    merged = MergedDetail(category=category, is_swap=is_swap, **fields)
    logger.debug(
        "receipt_normalized",
        category=category.value,
        is_swap=is_swap,
        resolved=sorted(k for k, v in fields.items() if is_present(v)),
    )
    return merged
