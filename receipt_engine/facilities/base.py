"""
Abstract base classes for the platform facilities the receipt engine calls.

The engine never talks to a device directly: printing, sharing, the
clipboard and the system link opener are all injected behind these
interfaces.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from receipt_engine.schemas.receipt import RenderedDocument


class DocumentPrinter(ABC):
    """
    Turns a rendered receipt into a PDF file.

    Every printer must:
    1. Return the path of a non-empty PDF file
    2. Report its name
    3. Raise PrinterError on failure (never return a partial file)
    """

    @property
    @abstractmethod
    def printer_name(self) -> str:
        ...

    @abstractmethod
    async def print_to_file(self, document: RenderedDocument) -> Path:
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the printer can produce output."""
        ...


class FileShareFacility(ABC):
    """The rich share sheet: accepts a file with MIME type and dialog title."""

    @property
    @abstractmethod
    def facility_name(self) -> str:
        ...

    @abstractmethod
    async def is_available(self) -> bool:
        ...

    @abstractmethod
    async def share_file(
        self,
        path: Path,
        mime_type: str,
        dialog_title: str,
        uti: Optional[str] = None,
    ) -> None:
        ...


class MessageShareFacility(ABC):
    """The generic share call: a title, a text message and an optional URL."""

    @property
    @abstractmethod
    def facility_name(self) -> str:
        ...

    @abstractmethod
    async def share_message(self, title: str, message: str, url: Optional[str] = None) -> None:
        ...


class Clipboard(ABC):
    @abstractmethod
    def set_text(self, value: str) -> None:
        ...


class LinkOpener(ABC):
    @abstractmethod
    async def can_open(self, url: str) -> bool:
        ...

    @abstractmethod
    async def open(self, url: str) -> None:
        ...


class PrinterError(Exception):
    """Raised when a printer fails to produce a document."""

    def __init__(self, printer_name: str, error_code: str, message: str):
        self.printer_name = printer_name
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{printer_name}] {error_code}: {message}")


class ShareError(Exception):
    """Raised when a share facility rejects or fails a share."""

    def __init__(self, facility_name: str, error_code: str, message: str):
        self.facility_name = facility_name
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{facility_name}] {error_code}: {message}")
