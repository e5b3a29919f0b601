"""
Request/response schemas for the receipt API.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from receipt_engine.models.enums import Category
from receipt_engine.schemas.receipt import CanonicalRow, ReceiptSummary
from receipt_engine.schemas.share import Notice


class ReceiptRequest(BaseModel):
    """
    Screen parameters as the history screen sends them.
    Each may be a JSON string (optionally URL-encoded), a list whose first
    element is used, or an already-decoded object.
    """
    tx: Any = None
    raw: Any = None


class ReceiptRowsResponse(BaseModel):
    available: bool
    message: Optional[str] = None
    receipt_id: Optional[str] = None
    category: Optional[Category] = None
    summary: Optional[ReceiptSummary] = None
    rows: list[CanonicalRow] = Field(default_factory=list)


class ExportFailureResponse(BaseModel):
    detail: Notice
