import uuid
from pathlib import Path, PurePath

from app.processor.exceptions import BlobNotFoundError, FetchError, StorageError
from app.storage.base import BaseBlobStorage


def blob_file_path(blob_root: Path, locator: str) -> Path:
    """Resolve a locator of the form {uuid}/{name} under *blob_root*."""
    root = blob_root.resolve()
    path = (root / locator).resolve()
    if root not in path.parents:
        raise BlobNotFoundError(f"Locator escapes blob root: {locator}")
    return path


class LocalBlobStorage(BaseBlobStorage):
    """Keeps uploads on the local filesystem, one directory per upload."""

    BLOB_ROOT = Path("/app/files")

    def __init__(self, blob_root: Path | None = None) -> None:
        self._blob_root = blob_root if blob_root is not None else self.BLOB_ROOT

    def store(self, raw: bytes, name: str) -> str:
        safe_name = PurePath(name).name or "upload"
        locator = f"{uuid.uuid4()}/{safe_name}"
        path = blob_file_path(self._blob_root, locator)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(raw)
        except OSError as exc:
            raise StorageError(f"Could not store blob {locator}: {exc}") from exc
        return locator

    def fetch(self, locator: str) -> bytes:
        path = blob_file_path(self._blob_root, locator)
        if not path.exists():
            raise BlobNotFoundError(f"Blob not found: {locator}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FetchError(f"Could not read blob {locator}: {exc}") from exc

    def delete(self, locator: str) -> None:
        path = blob_file_path(self._blob_root, locator)
        if not path.exists():
            raise BlobNotFoundError(f"Blob not found: {locator}")
        try:
            path.unlink()
            if not any(path.parent.iterdir()):
                path.parent.rmdir()
        except OSError as exc:
            raise StorageError(f"Could not delete blob {locator}: {exc}") from exc
