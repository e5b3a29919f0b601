"""
Receipt orchestration: the entry point a receipt screen calls.

    serialized params → parse_param → Envelope
        → classify → normalize → build_rows → ReceiptView
        → render_document (on demand, for export)

Parsing never raises: anything unusable becomes the explicit
"No transaction selected" screen state.
"""

import hashlib
import json
import re
from datetime import datetime
from typing import Any, Mapping, Optional, Union
from urllib.parse import unquote

import structlog
from pydantic import ValidationError

from receipt_engine.observability.metrics import receipt_payloads_rejected_total, receipts_built_total
from receipt_engine.pipeline.classifier import classify_with_signals
from receipt_engine.pipeline.document_renderer import render_document
from receipt_engine.pipeline.formatters import status_tone
from receipt_engine.pipeline.normalizer import normalize
from receipt_engine.pipeline.row_builder import build_rows
from receipt_engine.schemas.envelope import Envelope
from receipt_engine.schemas.receipt import ReceiptScreen, ReceiptSummary, ReceiptView, RenderedDocument

logger = structlog.get_logger(__name__)

NO_TRANSACTION_MESSAGE = "No transaction selected"
DEFAULT_TITLE = "Transaction"

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]+")

Param = Union[str, bytes, list, tuple, Mapping[str, Any], None]


def parse_param(value: Param) -> Optional[Any]:
    """
    Decode one screen parameter.

    Accepts a JSON string (URL-encoded or not), a list/tuple whose first
    element is used, or an already-decoded mapping. Returns None when
    nothing usable is found.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return parse_param(value[0]) if value else None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return json.loads(unquote(value))
    except ValueError:
        pass
    try:
        return json.loads(value)
    except ValueError:
        return None


def load_envelope(value: Param) -> Optional[Envelope]:
    """Parse and validate the transaction envelope, or None."""
    data = parse_param(value)
    if data is None:
        receipt_payloads_rejected_total.labels(reason="unparseable").inc()
        return None
    if not isinstance(data, Mapping):
        receipt_payloads_rejected_total.labels(reason="not_an_object").inc()
        logger.warning("receipt_payload_rejected", reason="not_an_object", payload_type=type(data).__name__)
        return None
    try:
        return Envelope.model_validate(data)
    except ValidationError as e:
        receipt_payloads_rejected_total.labels(reason="invalid").inc()
        logger.warning("receipt_payload_rejected", reason="invalid", errors=e.error_count())
        return None


def receipt_id_for(envelope: Envelope) -> str:
    """A filesystem-safe id: the envelope id, or a digest of its content."""
    if envelope.id:
        safe = _UNSAFE_ID_CHARS.sub("-", envelope.id).strip("-")
        if safe:
            return safe
    digest = hashlib.sha1(
        json.dumps(envelope.model_dump(by_alias=True), sort_keys=True, default=str).encode("utf-8")
    )
    return digest.hexdigest()[:16]


def build_summary(envelope: Envelope) -> ReceiptSummary:
    return ReceiptSummary(
        title=envelope.type or DEFAULT_TITLE,
        amount=envelope.amount,
        status=envelope.status,
        status_tone=status_tone(envelope.status),
    )


def build_receipt_view(envelope: Envelope, raw: Optional[Mapping[str, Any]] = None) -> ReceiptView:
    """Classify once, merge once, build rows once."""
    result = classify_with_signals(envelope)
    receipt_id = receipt_id_for(envelope)
    logger.info(
        "receipt_classified",
        receipt_id=receipt_id,
        category=result.category.value,
        rule=result.rule,
        signals=result.signals,
    )

    merged = normalize(envelope, result.category, raw)
    rows = build_rows(envelope, merged, result.category)
    receipts_built_total.labels(category=result.category.value).inc()

    return ReceiptView(
        receipt_id=receipt_id,
        category=result.category,
        summary=build_summary(envelope),
        merged=merged,
        rows=rows,
    )


def open_receipt(tx: Param, raw: Param = None) -> ReceiptScreen:
    """Screen state for the given parameters. Never raises on bad input."""
    envelope = load_envelope(tx)
    if envelope is None:
        return ReceiptScreen(available=False, message=NO_TRANSACTION_MESSAGE)

    raw_data = parse_param(raw)
    if raw_data is not None and not isinstance(raw_data, Mapping):
        logger.info("raw_payload_ignored", payload_type=type(raw_data).__name__)
        raw_data = None

    return ReceiptScreen(available=True, view=build_receipt_view(envelope, raw_data))


def document_for(view: ReceiptView, generated_at: Optional[datetime] = None) -> RenderedDocument:
    """The exportable document for a view, rendered from the view's own rows."""
    return render_document(view.receipt_id, view.rows, view.summary, generated_at=generated_at)
