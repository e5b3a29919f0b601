"""
Receipt document rendering.

Pure presentation over already-canonical data: the HTML document and the
plain-text summary are both produced from the CanonicalRow tuple and the
envelope summary, never from the envelope or raw payload directly.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from receipt_engine.config import settings
from receipt_engine.schemas.receipt import CanonicalRow, ReceiptSummary, RenderedDocument

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
RECEIPT_TEMPLATE = "receipt.html"
DOCUMENT_TITLE = "Transaction Receipt"
TEXT_SUMMARY_HEADING = "Transaction Details"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


def format_generated_on(moment: datetime) -> str:
    return moment.strftime("%b %d, %Y, %I:%M %p")


def render_html(
    rows: tuple[CanonicalRow, ...],
    summary: ReceiptSummary,
    generated_at: datetime,
) -> str:
    """Complete HTML document for the receipt."""
    template = _env.get_template(RECEIPT_TEMPLATE)
    return template.render(
        document_title=DOCUMENT_TITLE,
        summary=summary,
        rows=rows,
        brand_name=settings.BRAND_NAME,
        generated_on=format_generated_on(generated_at),
    )


def render_text_summary(rows: tuple[CanonicalRow, ...], summary: ReceiptSummary) -> str:
    """Plain-text receipt for share targets that only accept a message."""
    lines = [
        TEXT_SUMMARY_HEADING,
        "",
        f"Status: {summary.status or settings.PLACEHOLDER}",
        f"Amount: {summary.amount or settings.PLACEHOLDER}",
        "",
    ]
    lines.extend(f"{row.label}: {row.copyable or row.value}" for row in rows)
    return "\n".join(lines)


def render_document(
    receipt_id: str,
    rows: tuple[CanonicalRow, ...],
    summary: ReceiptSummary,
    generated_at: Optional[datetime] = None,
) -> RenderedDocument:
    """Render both document forms from one finalized row tuple."""
    generated_at = generated_at or datetime.now(timezone.utc)
    return RenderedDocument(
        receipt_id=receipt_id,
        title=DOCUMENT_TITLE,
        html=render_html(rows, summary, generated_at),
        text_summary=render_text_summary(rows, summary),
        rows=rows,
        summary=summary,
        generated_at=generated_at,
    )
