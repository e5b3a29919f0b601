"""
ReportLab printer.
Lays the receipt's canonical rows out as a one-page PDF and stores it
through the ArtifactStore.
"""

import io
import uuid
from pathlib import Path
from xml.sax.saxutils import escape

import structlog
from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from receipt_engine.config import settings
from receipt_engine.facilities.base import DocumentPrinter, PrinterError
from receipt_engine.models.enums import StatusTone
from receipt_engine.pipeline.document_renderer import format_generated_on
from receipt_engine.schemas.receipt import RenderedDocument
from receipt_engine.storage.artifact_store import ArtifactStore
from receipt_engine.storage.paths import receipt_pdf_path

logger = structlog.get_logger(__name__)

BRAND_COLOR = colors.HexColor("#35297F")
MUTED_COLOR = colors.HexColor("#6B7280")
CARD_COLOR = colors.HexColor("#F8F9FA")
BORDER_COLOR = colors.HexColor("#E5E7EB")

STATUS_COLORS = {
    StatusTone.SUCCESS: colors.HexColor("#166534"),
    StatusTone.FAILED: colors.HexColor("#991B1B"),
    StatusTone.PENDING: colors.HexColor("#92400E"),
}


class ReportLabPrinter(DocumentPrinter):
    """Renders RenderedDocument rows with reportlab.platypus."""

    def __init__(self, store: ArtifactStore):
        self.store = store

    @property
    def printer_name(self) -> str:
        return "reportlab"

    def _story(self, document: RenderedDocument) -> list:
        styles = getSampleStyleSheet()
        center = ParagraphStyle("Center", parent=styles["Normal"], alignment=1)
        status_style = ParagraphStyle(
            "Status",
            parent=center,
            textColor=STATUS_COLORS[document.summary.status_tone],
            fontName="Helvetica-Bold",
        )
        link_style = ParagraphStyle("Link", parent=styles["Normal"], alignment=2, textColor=BRAND_COLOR)
        value_style = ParagraphStyle("Value", parent=styles["Normal"], alignment=2)
        label_style = ParagraphStyle("Label", parent=styles["Normal"], textColor=MUTED_COLOR)

        story = [
            Paragraph(escape(document.summary.title), styles["Title"]),
            Paragraph(f"<b>{escape(document.summary.amount)}</b>", ParagraphStyle(
                "Amount", parent=center, fontSize=20, leading=26,
            )),
            Spacer(1, 0.1 * inch),
            Paragraph(escape(document.summary.status), status_style),
            Spacer(1, 0.25 * inch),
        ]

        table_data = []
        for row in document.rows:
            if row.external_link:
                href = escape(row.external_link, {'"': "&quot;"})
                value = Paragraph(
                    f'<link href="{href}"><u>{escape(row.value)}</u></link>',
                    link_style,
                )
            else:
                value = Paragraph(escape(row.value), value_style)
            table_data.append([Paragraph(escape(row.label), label_style), value])

        if table_data:
            tbl = Table(table_data, colWidths=[2.0 * inch, 4.5 * inch])
            tbl.setStyle(TableStyle([
                ("BACKGROUND", (0, 0), (-1, -1), CARD_COLOR),
                ("BOX", (0, 0), (-1, -1), 0.5, BORDER_COLOR),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
            ]))
            story.append(tbl)

        story.extend([
            Spacer(1, 0.3 * inch),
            Paragraph(f"Thank you for choosing {escape(settings.BRAND_NAME)}.", label_style),
            Spacer(1, 0.2 * inch),
            Paragraph(
                f"Generated on: {escape(format_generated_on(document.generated_at))}",
                ParagraphStyle("Footer", parent=center, textColor=MUTED_COLOR, fontSize=8),
            ),
        ])
        return story

    def render_bytes(self, document: RenderedDocument) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=(settings.PDF_PAGE_WIDTH, settings.PDF_PAGE_HEIGHT),
            title=document.title,
            leftMargin=0.75 * inch,
            rightMargin=0.75 * inch,
            topMargin=0.75 * inch,
            bottomMargin=0.75 * inch,
        )
        doc.build(self._story(document))
        return buffer.getvalue()

    async def print_to_file(self, document: RenderedDocument) -> Path:
        try:
            data = self.render_bytes(document)
        except Exception as e:
            logger.error("receipt_pdf_render_failed", receipt_id=document.receipt_id, error=str(e))
            raise PrinterError(self.printer_name, "ERR_RENDER", str(e)) from e

        if not data:
            raise PrinterError(self.printer_name, "ERR_EMPTY", "renderer produced no output")

        relative = receipt_pdf_path(document.receipt_id, uuid.uuid4().hex)
        self.store.save_bytes(relative, data)
        return self.store.full_path(relative)

    async def health_check(self) -> bool:
        return self.store.is_writable()
