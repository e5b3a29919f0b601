"""
/api/v1/receipts endpoints.
Rows for the on-screen list, the HTML document, and the exported PDF.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from receipt_engine.config import settings
from receipt_engine.dependencies import get_artifact_store, get_printer, verify_api_key
from receipt_engine.facilities.base import DocumentPrinter
from receipt_engine.facilities.download import DownloadFileShare, UnsupportedMessageShare
from receipt_engine.pipeline.orchestrator import NO_TRANSACTION_MESSAGE, document_for, open_receipt
from receipt_engine.pipeline.share_export import ShareExportPipeline
from receipt_engine.schemas.api import ExportFailureResponse, ReceiptRequest, ReceiptRowsResponse
from receipt_engine.schemas.receipt import ReceiptView
from receipt_engine.storage.artifact_store import ArtifactStore

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/receipts", tags=["receipts"], dependencies=[Depends(verify_api_key)])


def _require_view(body: ReceiptRequest) -> ReceiptView:
    screen = open_receipt(body.tx, body.raw)
    if not screen.available:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NO_TRANSACTION_MESSAGE)
    return screen.view


@router.post("/rows", response_model=ReceiptRowsResponse)
async def receipt_rows(body: ReceiptRequest):
    """Canonical rows for the receipt screen. Bad payloads yield available=false."""
    screen = open_receipt(body.tx, body.raw)
    if not screen.available:
        return ReceiptRowsResponse(available=False, message=screen.message)

    view = screen.view
    return ReceiptRowsResponse(
        available=True,
        receipt_id=view.receipt_id,
        category=view.category,
        summary=view.summary,
        rows=list(view.rows),
    )


@router.post("/document", response_class=HTMLResponse)
async def receipt_document(body: ReceiptRequest):
    """The stand-alone HTML receipt."""
    view = _require_view(body)
    return HTMLResponse(document_for(view).html)


@router.post(
    "/export",
    response_class=Response,
    responses={502: {"model": ExportFailureResponse}},
)
async def export_receipt(
    body: ReceiptRequest,
    store: ArtifactStore = Depends(get_artifact_store),
    printer: DocumentPrinter = Depends(get_printer),
):
    """Run the share pipeline with the response as the share target and return the PDF."""
    view = _require_view(body)
    download = DownloadFileShare()
    pipeline = ShareExportPipeline(printer, download, UnsupportedMessageShare(), store)

    outcome = await pipeline.share(document_for(view))
    if not outcome.shared or download.path is None:
        logger.warning("receipt_export_rejected", receipt_id=view.receipt_id, state=outcome.state.value)
        notice = outcome.notice.model_dump() if outcome.notice else None
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": notice})

    data = download.path.read_bytes()
    store.delete_path(download.path)
    return Response(
        content=data,
        media_type=download.mime_type or settings.SHARE_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="receipt-{view.receipt_id}.pdf"'},
    )
