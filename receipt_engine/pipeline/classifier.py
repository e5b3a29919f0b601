"""
Transaction category classification: token, utility or withdrawal.

Rules are applied in order and the first match wins:
1. explicit withdrawal flag, or fiat currency on a "withdrawal" type
2. explicit category tag on the detail payload
3. detail key heuristics
4. type-label fallback
"""

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ValidationError

from receipt_engine.config import settings
from receipt_engine.models.enums import Category
from receipt_engine.schemas.envelope import Envelope


class ClassificationResult(BaseModel):
    category: Category
    rule: str
    signals: list[str] = []


WITHDRAWAL_FLAGS = ("isNGNZWithdrawal", "isWithdrawal", "isWithdrawalFlag")

TOKEN_DETAIL_KEYS = ("transactionId", "currency", "hash", "address")
UTILITY_DETAIL_KEYS = ("orderId", "productName", "billType", "customerInfo")

UTILITY_TYPE_LABELS = frozenset({
    "airtime",
    "data",
    "electricity",
    "cable tv",
    "internet",
    "betting",
    "education",
    "other",
})


def _is_true(value: Any) -> bool:
    """Only a real True or the text "true" sets a flag; "false" and 1 do not."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _flag_set(source: Mapping, signals: list[str], where: str) -> bool:
    for flag in WITHDRAWAL_FLAGS:
        if _is_true(source.get(flag)):
            signals.append(f"FLAG:{where}.{flag}")
            return True
    return False


def _as_envelope(envelope: Union[Envelope, Mapping[str, Any]]) -> Envelope:
    if isinstance(envelope, Envelope):
        return envelope
    data = dict(envelope)
    try:
        return Envelope.model_validate(data)
    except ValidationError as e:
        bad_keys = {err["loc"][0] for err in e.errors() if err["loc"]}
        return Envelope.model_validate({k: v for k, v in data.items() if k not in bad_keys})


def classify_with_signals(envelope: Union[Envelope, Mapping[str, Any]]) -> ClassificationResult:
    """Classify and report which rule decided it."""
    env = _as_envelope(envelope)
    top = env.as_source()
    details = env.detail_source()
    type_text = (env.type or "").strip().lower()
    signals: list[str] = []

    # Rule 1: withdrawal
    flagged = _flag_set(top, signals, "envelope") or _flag_set(details, signals, "details")
    currency = details.get("currency")
    fiat_withdrawal = (
        isinstance(currency, str)
        and currency.strip().upper() in settings.fiat_codes
        and "withdrawal" in type_text
    )
    if fiat_withdrawal:
        signals.append(f"FIAT_WITHDRAWAL:{currency}")
    if flagged or fiat_withdrawal:
        return ClassificationResult(category=Category.WITHDRAWAL, rule="withdrawal", signals=signals)

    # Rule 2: explicit tag
    tag = details.get("category")
    if isinstance(tag, str) and tag in {c.value for c in Category}:
        signals.append(f"TAG:{tag}")
        return ClassificationResult(category=Category(tag), rule="tag", signals=signals)

    # Rule 3: key heuristics
    token_keys = [k for k in TOKEN_DETAIL_KEYS if k in details]
    if token_keys:
        signals.extend(f"KEY:{k}" for k in token_keys)
        return ClassificationResult(category=Category.TOKEN, rule="heuristic", signals=signals)
    utility_keys = [k for k in UTILITY_DETAIL_KEYS if k in details]
    if utility_keys:
        signals.extend(f"KEY:{k}" for k in utility_keys)
        return ClassificationResult(category=Category.UTILITY, rule="heuristic", signals=signals)

    # Rule 4: type label
    if type_text in UTILITY_TYPE_LABELS:
        signals.append(f"TYPE:{type_text}")
        return ClassificationResult(category=Category.UTILITY, rule="type_label", signals=signals)
    return ClassificationResult(category=Category.TOKEN, rule="fallback", signals=signals)


def classify(envelope: Union[Envelope, Mapping[str, Any]]) -> Category:
    """Decide the receipt category for an envelope. Pure and deterministic."""
    return classify_with_signals(envelope).category
