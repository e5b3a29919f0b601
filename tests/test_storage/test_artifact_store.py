"""
Tests for the filesystem artifact store.
"""

from receipt_engine.storage.artifact_store import ArtifactStore
from receipt_engine.storage.paths import receipt_pdf_path


class TestArtifactStore:
    """Save and delete under ARTIFACT_ROOT."""

    def test_save(self, artifact_store):
        relative = receipt_pdf_path("r-1", "e-1")
        assert relative == "receipts/r-1/e-1.pdf"
        assert artifact_store.save_bytes(relative, b"%PDF-1.4") == relative
        assert artifact_store.full_path(relative).read_bytes() == b"%PDF-1.4"

    def test_delete_missing(self, artifact_store):
        assert not artifact_store.delete("receipts/none/none.pdf")

    def test_delete_path_inside_root(self, artifact_store):
        relative = receipt_pdf_path("r-2", "e-2")
        artifact_store.save_bytes(relative, b"data")
        assert artifact_store.delete_path(artifact_store.full_path(relative))
        assert not artifact_store.full_path(relative).exists()

    def test_delete_path_outside_root(self, artifact_store, tmp_path):
        outside = tmp_path / "elsewhere.pdf"
        outside.write_bytes(b"data")
        assert not artifact_store.delete_path(outside)
        assert outside.exists()

    def test_writable(self, tmp_path):
        assert ArtifactStore(root=str(tmp_path / "new")).is_writable()
