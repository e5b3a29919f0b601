"""
Artifact store for generated receipt documents.
Local filesystem under ARTIFACT_ROOT; nothing here outlives an export
except by explicit save.
"""

from pathlib import Path
from typing import Optional

import structlog

from receipt_engine.config import settings
from receipt_engine.storage.paths import ensure_parent_dirs

logger = structlog.get_logger(__name__)


class ArtifactStore:
    """
    Save and remove receipt artifacts.
    All paths are relative to ARTIFACT_ROOT.
    """

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.ARTIFACT_ROOT)
        self.root.mkdir(parents=True, exist_ok=True)

    def save_bytes(self, relative_path: str, data: bytes) -> str:
        """Save raw bytes (PDF). Returns the relative path."""
        full_path = ensure_parent_dirs(str(self.root), relative_path)
        full_path.write_bytes(data)
        logger.info("artifact_saved", path=relative_path, size_bytes=len(data))
        return relative_path

    def delete(self, relative_path: str) -> bool:
        """Delete an artifact. Returns True if it existed."""
        full_path = self.root / relative_path
        if full_path.exists():
            full_path.unlink()
            logger.info("artifact_deleted", path=relative_path)
            return True
        return False

    def delete_path(self, path: Path) -> bool:
        """Delete an artifact given its absolute path, if it lives in this store."""
        try:
            relative = Path(path).resolve().relative_to(self.root.resolve())
        except ValueError:
            return False
        return self.delete(str(relative))

    def full_path(self, relative_path: str) -> Path:
        """Get the absolute filesystem path for an artifact."""
        return self.root / relative_path

    def is_writable(self) -> bool:
        marker = self.root / ".write-check"
        try:
            marker.write_bytes(b"")
            marker.unlink()
            return True
        except OSError:
            return False
