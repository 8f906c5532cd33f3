"""Blob storage for uploaded API definition files.

Files live in a single bucket directory; a file path is the name of the
blob inside the bucket.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "config-files"


class StorageError(Exception):
    """A blob could not be stored, found, or read."""


class LocalStorage:
    """Filesystem-backed bucket."""

    def __init__(self, root: Path, bucket: str = DEFAULT_BUCKET):
        self.bucket_dir = root / bucket

    def upload(self, file_path: str, data: bytes) -> str:
        """Store data under file_path. Returns the stored path."""
        target = self._resolve(file_path)
        if target.exists():
            raise StorageError(f"The resource already exists: {file_path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(str(e)) from e
        logger.debug("Stored %s (%d bytes)", file_path, len(data))
        return file_path

    def download(self, file_path: str) -> bytes:
        target = self._resolve(file_path)
        if not target.is_file():
            raise StorageError(f"Object not found: {file_path}")
        try:
            return target.read_bytes()
        except OSError as e:
            raise StorageError(str(e)) from e

    def remove(self, file_paths: list[str]) -> None:
        for file_path in file_paths:
            target = self._resolve(file_path)
            target.unlink(missing_ok=True)
            logger.debug("Removed %s", file_path)

    def _resolve(self, file_path: str) -> Path:
        target = (self.bucket_dir / file_path).resolve()
        if self.bucket_dir.resolve() not in target.parents:
            raise StorageError(f"Invalid file path: {file_path}")
        return target
