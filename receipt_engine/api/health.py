"""
Health check endpoint.
Always returns 200; a printer or storage problem shows up as "degraded".
"""

from fastapi import APIRouter, Depends

from receipt_engine.config import settings
from receipt_engine.dependencies import get_artifact_store, get_printer
from receipt_engine.facilities.base import DocumentPrinter
from receipt_engine.storage.artifact_store import ArtifactStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    store: ArtifactStore = Depends(get_artifact_store),
    printer: DocumentPrinter = Depends(get_printer),
):
    storage_ok = store.is_writable()
    printer_error = None
    try:
        printer_ok = await printer.health_check()
    except Exception as e:
        printer_ok = False
        printer_error = str(e)[:200]

    response = {
        "status": "healthy" if storage_ok and printer_ok else "degraded",
        "version": settings.APP_VERSION,
        "storage": "writable" if storage_ok else "unwritable",
        "printer": printer.printer_name if printer_ok else "unavailable",
    }
    if printer_error:
        response["printer_error"] = printer_error

    return response
