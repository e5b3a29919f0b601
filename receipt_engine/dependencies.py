"""
FastAPI dependency injection.
Provides the artifact store, the PDF printer, and API key validation.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from receipt_engine.config import settings
from receipt_engine.facilities.base import DocumentPrinter
from receipt_engine.facilities.reportlab_printer import ReportLabPrinter
from receipt_engine.storage.artifact_store import ArtifactStore


# ── Singleton instances ──────────────────────────────────────
_artifact_store: Optional[ArtifactStore] = None


def get_artifact_store() -> ArtifactStore:
    """Get or create the artifact store singleton."""
    global _artifact_store
    if _artifact_store is None:
        _artifact_store = ArtifactStore()
    return _artifact_store


def get_printer(store: ArtifactStore = Depends(get_artifact_store)) -> DocumentPrinter:
    return ReportLabPrinter(store)


async def verify_api_key(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> Optional[str]:
    """
    Verify API key if configured.
    If API_KEY is not set, all requests are allowed (dev mode).
    """
    if settings.API_KEY is None:
        return None

    if x_api_key is None or x_api_key != settings.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return x_api_key
