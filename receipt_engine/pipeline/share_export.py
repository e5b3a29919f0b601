"""
Share / export pipeline.

    IDLE → GENERATING → READY → SHARED
                 ↘ FAILED → IDLE   (generation or both share paths failed)

A pipeline instance serves exactly one user-triggered share. ShareController
is what a screen holds: it refuses a second trigger while one is in flight
and builds a fresh pipeline for every accepted trigger.
"""

import time
from pathlib import Path
from typing import Optional

import structlog

from receipt_engine.config import settings
from receipt_engine.facilities.base import (
    DocumentPrinter,
    FileShareFacility,
    MessageShareFacility,
    PrinterError,
    ShareError,
)
from receipt_engine.models.enums import ShareChannel, ShareState
from receipt_engine.observability.metrics import (
    receipt_export_duration_seconds,
    receipt_export_failures_total,
    receipt_exports_total,
)
from receipt_engine.schemas.receipt import RenderedDocument
from receipt_engine.schemas.share import Notice, ShareOutcome, StateTransition
from receipt_engine.storage.artifact_store import ArtifactStore

logger = structlog.get_logger(__name__)

GENERATION_FAILED = Notice(
    title="Share failed",
    message="Could not generate PDF receipt. Please try again.",
)
SHARE_FAILED = Notice(
    title="Share failed",
    message="Could not open share sheet.",
)
SHARE_IN_PROGRESS = Notice(
    title="Please wait",
    message="Your receipt is already being prepared.",
)
NO_TRANSACTION = Notice(
    title="Error",
    message="No transaction data to share",
)

FALLBACK_SHARE_TITLE = "Transaction Receipt"

ALLOWED_TRANSITIONS = {
    ShareState.IDLE: {ShareState.GENERATING},
    ShareState.GENERATING: {ShareState.READY, ShareState.FAILED},
    ShareState.READY: {ShareState.SHARED, ShareState.FAILED},
    ShareState.FAILED: {ShareState.IDLE},
    ShareState.SHARED: set(),
}


class InvalidShareTransition(Exception):
    def __init__(self, from_state: ShareState, to_state: ShareState):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Illegal share transition {from_state.value} → {to_state.value}")


class ShareExportPipeline:
    """
    One export of one receipt document.

    Printing failures and share failures both end in a notice and a return
    to IDLE; the generated file is removed whenever the share did not go
    through.
    """

    def __init__(
        self,
        printer: DocumentPrinter,
        file_share: FileShareFacility,
        message_share: MessageShareFacility,
        store: Optional[ArtifactStore] = None,
    ):
        self.printer = printer
        self.file_share = file_share
        self.message_share = message_share
        self.store = store
        self.state = ShareState.IDLE
        self._transitions: list[StateTransition] = []
        self._used = False

    def _move(self, to_state: ShareState, reason: Optional[str] = None) -> None:
        if to_state not in ALLOWED_TRANSITIONS[self.state]:
            raise InvalidShareTransition(self.state, to_state)
        self._transitions.append(StateTransition(from_state=self.state, to_state=to_state, reason=reason))
        logger.info("share_state_changed", from_state=self.state.value, to_state=to_state.value, reason=reason)
        self.state = to_state

    def _discard(self, path: Optional[Path]) -> None:
        if path is None:
            return
        if self.store is not None and self.store.delete_path(path):
            return
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("receipt_file_cleanup_failed", path=str(path), error=str(e))

    def _fail(self, stage: str, notice: Notice, reason: str) -> ShareOutcome:
        receipt_export_failures_total.labels(stage=stage).inc()
        self._move(ShareState.FAILED, reason=reason)
        self._move(ShareState.IDLE)
        return ShareOutcome(
            state=ShareState.IDLE,
            notice=notice,
            transitions=tuple(self._transitions),
        )

    async def _generate(self, document: RenderedDocument) -> Optional[Path]:
        path = await self.printer.print_to_file(document)
        if path is None:
            return None
        path = Path(path)
        if not path.exists() or path.stat().st_size == 0:
            self._discard(path)
            return None
        return path

    async def _deliver(self, document: RenderedDocument, path: Path) -> ShareChannel:
        """
        Rich share sheet first, generic share second.
        Any facility failure becomes a ShareError once both paths are exhausted.
        """
        try:
            if await self.file_share.is_available():
                await self.file_share.share_file(
                    path,
                    mime_type=settings.SHARE_MIME_TYPE,
                    dialog_title=settings.SHARE_DIALOG_TITLE,
                    uti=settings.SHARE_UTI,
                )
                return ShareChannel.FILE
            logger.info("file_share_unavailable", facility=self.file_share.facility_name)
        except ShareError as e:
            logger.warning("file_share_failed", facility=e.facility_name, error_code=e.error_code)
        except Exception as e:
            logger.warning("file_share_failed", facility=self.file_share.facility_name, error=str(e))

        try:
            await self.message_share.share_message(
                title=FALLBACK_SHARE_TITLE,
                message=document.text_summary,
                url=path.as_uri(),
            )
        except ShareError:
            raise
        except Exception as e:
            raise ShareError(self.message_share.facility_name, type(e).__name__, str(e)) from e
        return ShareChannel.MESSAGE

    async def share(self, document: RenderedDocument) -> ShareOutcome:
        """Run one export from IDLE to SHARED, or back to IDLE with a notice."""
        if self._used:
            raise RuntimeError("ShareExportPipeline instances are single-use")
        self._used = True
        started = time.monotonic()

        self._move(ShareState.GENERATING)
        try:
            path = await self._generate(document)
        except PrinterError as e:
            logger.error("receipt_export_failed", stage="generate", receipt_id=document.receipt_id, error=str(e))
            return self._fail("generate", GENERATION_FAILED, reason=e.error_code)
        except Exception as e:
            logger.error("receipt_export_failed", stage="generate", receipt_id=document.receipt_id, error=str(e))
            return self._fail("generate", GENERATION_FAILED, reason=type(e).__name__)

        if path is None:
            logger.error("receipt_export_failed", stage="generate", receipt_id=document.receipt_id, error="no output")
            return self._fail("generate", GENERATION_FAILED, reason="ERR_EMPTY")
        self._move(ShareState.READY)

        try:
            channel = await self._deliver(document, path)
        except ShareError as e:
            self._discard(path)
            logger.error("receipt_export_failed", stage="share", receipt_id=document.receipt_id, error=str(e))
            return self._fail("share", SHARE_FAILED, reason=e.error_code)

        self._move(ShareState.SHARED, reason=channel.value)
        receipt_exports_total.labels(channel=channel.value).inc()
        receipt_export_duration_seconds.observe(time.monotonic() - started)
        logger.info("receipt_shared", receipt_id=document.receipt_id, channel=channel.value)
        return ShareOutcome(
            state=ShareState.SHARED,
            channel=channel,
            transitions=tuple(self._transitions),
        )


class ShareController:
    """
    The share button's behaviour for one receipt screen.
    A trigger while an export is in flight is ignored with a notice.
    """

    def __init__(
        self,
        printer: DocumentPrinter,
        file_share: FileShareFacility,
        message_share: MessageShareFacility,
        store: Optional[ArtifactStore] = None,
    ):
        self.printer = printer
        self.file_share = file_share
        self.message_share = message_share
        self.store = store
        self._in_flight: Optional[ShareExportPipeline] = None

    @property
    def busy(self) -> bool:
        return self._in_flight is not None

    async def trigger(self, document: Optional[RenderedDocument]) -> ShareOutcome:
        if document is None:
            return ShareOutcome(state=ShareState.IDLE, notice=NO_TRANSACTION)
        if self._in_flight is not None:
            logger.info("share_ignored_in_flight", receipt_id=document.receipt_id)
            return ShareOutcome(
                state=self._in_flight.state,
                notice=SHARE_IN_PROGRESS,
                in_progress=True,
            )

        pipeline = ShareExportPipeline(self.printer, self.file_share, self.message_share, self.store)
        self._in_flight = pipeline
        try:
            return await pipeline.share(document)
        finally:
            self._in_flight = None
