"""
In-memory facilities for tests and headless use.
They record what they were asked to do instead of touching a device.
"""

from pathlib import Path
from typing import Optional

from receipt_engine.facilities.base import (
    Clipboard,
    DocumentPrinter,
    FileShareFacility,
    LinkOpener,
    MessageShareFacility,
    PrinterError,
    ShareError,
)
from receipt_engine.schemas.receipt import RenderedDocument


class StubPrinter(DocumentPrinter):
    """Writes the HTML bytes as the 'PDF', or fails on demand."""

    def __init__(self, output_dir: Path, fail: bool = False, empty: bool = False):
        self.output_dir = Path(output_dir)
        self.fail = fail
        self.empty = empty
        self.printed: list[str] = []

    @property
    def printer_name(self) -> str:
        return "stub"

    async def print_to_file(self, document: RenderedDocument) -> Path:
        if self.fail:
            raise PrinterError(self.printer_name, "ERR_PRINT", "printer unavailable")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{document.receipt_id}.pdf"
        path.write_bytes(b"" if self.empty else document.html.encode("utf-8"))
        self.printed.append(document.receipt_id)
        return path

    async def health_check(self) -> bool:
        return not self.fail


class StubFileShare(FileShareFacility):
    def __init__(self, available: bool = True, fail: bool = False):
        self.available = available
        self.fail = fail
        self.shared: list[dict] = []

    @property
    def facility_name(self) -> str:
        return "stub_file_share"

    async def is_available(self) -> bool:
        return self.available

    async def share_file(
        self,
        path: Path,
        mime_type: str,
        dialog_title: str,
        uti: Optional[str] = None,
    ) -> None:
        if self.fail:
            raise ShareError(self.facility_name, "ERR_SHARE", "share sheet dismissed with error")
        self.shared.append({
            "path": Path(path),
            "mime_type": mime_type,
            "dialog_title": dialog_title,
            "uti": uti,
        })


class StubMessageShare(MessageShareFacility):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages: list[dict] = []

    @property
    def facility_name(self) -> str:
        return "stub_message_share"

    async def share_message(self, title: str, message: str, url: Optional[str] = None) -> None:
        if self.fail:
            raise ShareError(self.facility_name, "ERR_SHARE", "share call failed")
        self.messages.append({"title": title, "message": message, "url": url})


class StubClipboard(Clipboard):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.value: Optional[str] = None

    def set_text(self, value: str) -> None:
        if self.fail:
            raise OSError("clipboard unavailable")
        self.value = value


class StubLinkOpener(LinkOpener):
    def __init__(self, supported: bool = True, fail: bool = False):
        self.supported = supported
        self.fail = fail
        self.opened: list[str] = []

    async def can_open(self, url: str) -> bool:
        return self.supported

    async def open(self, url: str) -> None:
        if self.fail:
            raise OSError("link opener crashed")
        self.opened.append(url)
