from pathlib import Path

from docintake.storage.base import BaseBlobStore
from docintake.storage.exceptions import BlobNotFoundError, BlobStoreError


class LocalBlobStore(BaseBlobStore):
    """Reads documents from a directory tree on the local filesystem."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def download(self, path: str) -> bytes:
        resolved = self._resolve_path(path)
        if not resolved.is_file():
            raise BlobNotFoundError(f"File not found: {path}")
        try:
            return resolved.read_bytes()
        except OSError as exc:
            raise BlobStoreError(f"Cannot read {path}: {exc}") from exc

    def _resolve_path(self, path: str) -> Path:
        root = self._files_root.resolve()
        resolved = (root / path.lstrip("/")).resolve()
        if not resolved.is_relative_to(root):
            raise BlobStoreError(f"Path escapes storage root: {path}")
        return resolved
