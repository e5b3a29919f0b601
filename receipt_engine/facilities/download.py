"""
Share facilities for HTTP export.

Over HTTP the "share sheet" is the response body: DownloadFileShare records
the generated file so the endpoint can stream it back. There is no generic
message channel, so the fallback always refuses.
"""

from pathlib import Path
from typing import Optional

from receipt_engine.facilities.base import FileShareFacility, MessageShareFacility, ShareError


class DownloadFileShare(FileShareFacility):
    def __init__(self):
        self.path: Optional[Path] = None
        self.mime_type: Optional[str] = None
        self.dialog_title: Optional[str] = None

    @property
    def facility_name(self) -> str:
        return "download"

    async def is_available(self) -> bool:
        return True

    async def share_file(
        self,
        path: Path,
        mime_type: str,
        dialog_title: str,
        uti: Optional[str] = None,
    ) -> None:
        path = Path(path)
        if not path.is_file():
            raise ShareError(self.facility_name, "ERR_MISSING", f"no file at {path}")
        self.path = path
        self.mime_type = mime_type
        self.dialog_title = dialog_title


class UnsupportedMessageShare(MessageShareFacility):
    @property
    def facility_name(self) -> str:
        return "none"

    async def share_message(self, title: str, message: str, url: Optional[str] = None) -> None:
        raise ShareError(self.facility_name, "ERR_UNSUPPORTED", "message sharing is not available over HTTP")
