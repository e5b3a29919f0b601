"""
Path generation for receipt artifacts.
All paths are relative to ARTIFACT_ROOT.
"""

from pathlib import Path


def receipt_dir(receipt_id: str) -> str:
    """Directory holding every export of one receipt."""
    return f"receipts/{receipt_id}"


def receipt_pdf_path(receipt_id: str, export_id: str) -> str:
    """Path for one generated receipt PDF."""
    return f"{receipt_dir(receipt_id)}/{export_id}.pdf"


def ensure_parent_dirs(artifact_root: str, relative_path: str) -> Path:
    """Create parent directories and return the full absolute path."""
    full_path = Path(artifact_root) / relative_path
    full_path.parent.mkdir(parents=True, exist_ok=True)
    return full_path
