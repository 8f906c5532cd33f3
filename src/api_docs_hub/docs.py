"""Upload, list and load API documentation.

Loading fetches the stored file, parses it, detects its format and
normalizes it for the reference viewer. Every outcome is reported as a
success / warning / error Message.
"""

import logging
import secrets
import time
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel

from api_docs_hub.parser.detect import POSTMAN, normalize_document
from api_docs_hub.parser.loader import LoadError, parse_document
from api_docs_hub.slug import slugify
from api_docs_hub.store.records import ConfigRecord, RecordStore, RecordStoreError
from api_docs_hub.store.storage import LocalStorage, StorageError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024


class Message(BaseModel):
    type: Literal["success", "warning", "error"]
    text: str


class LoadResult(BaseModel):
    """Outcome of loading one document. content is None when nothing can be rendered."""

    title: str | None = None
    slug: str | None = None
    format: str | None = None
    content: Any = None
    messages: list[Message] = []

    @property
    def ok(self) -> bool:
        return self.content is not None


class UploadError(Exception):
    """An upload was rejected or could not be completed."""


class DocsService:
    """Ties blob storage and the record store to the normalization pipeline."""

    def __init__(self, storage: LocalStorage, records: RecordStore):
        self.storage = storage
        self.records = records

    def upload(self, title: str, source: Path, user_id: str | None = None) -> ConfigRecord:
        """Store a file and its metadata record.

        The stored blob is removed again if the record cannot be saved.
        """
        if not title.strip():
            raise UploadError("Please enter a title")
        if not source.is_file():
            raise UploadError("Please select a file")

        data = source.read_bytes()
        if len(data) > MAX_FILE_SIZE:
            raise UploadError("File size must be less than 10MB")

        ext = source.suffix.lstrip(".").lower()
        unique_name = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"
        if ext:
            unique_name = f"{unique_name}.{ext}"

        try:
            file_path = self.storage.upload(unique_name, data)
        except StorageError as e:
            raise UploadError(f"Upload failed: {e}") from e

        record = ConfigRecord(
            title=title,
            file_path=file_path,
            file_name=source.name,
            file_size=len(data),
            file_type=ext or "unknown",
            user_id=user_id,
        )
        try:
            self.records.insert(record)
        except RecordStoreError as e:
            logger.error("Database error, removing uploaded file %s", file_path)
            self.storage.remove([file_path])
            raise UploadError(f"Database error: {e}") from e

        logger.info("Uploaded '%s' as %s", title, file_path)
        return record

    def list_docs(self) -> list[ConfigRecord]:
        """All uploaded documents, newest first."""
        return self.records.newest_first()

    def load(self, api: str | None = None) -> LoadResult:
        """Select a record by slug (or the first one), fetch, parse and normalize it."""
        try:
            return self._load(api)
        except LoadError as e:
            logger.error("Load failed: %s", e)
            return LoadResult(messages=[Message(type="error", text=str(e))])

    def _load(self, api: str | None) -> LoadResult:
        record, messages = self._select(api)
        if record is None:
            return LoadResult(messages=messages)

        text = self._fetch(record)
        document = parse_document(text, record.file_type)
        normalized = normalize_document(document)

        action = "converted" if normalized.format == POSTMAN else "processed"
        messages.append(Message(type="success", text=f"Successfully loaded and {action} {record.title}"))
        messages.extend(Message(type="warning", text=w) for w in normalized.warnings)

        return LoadResult(
            title=record.title,
            slug=slugify(record.title),
            format=normalized.format,
            content=normalized.content,
            messages=messages,
        )

    def _select(self, api: str | None) -> tuple[ConfigRecord | None, list[Message]]:
        try:
            records = self.records.all()
        except RecordStoreError as e:
            raise LoadError(str(e)) from e

        if not api:
            if not records:
                return None, [Message(type="warning", text="No API documentation available")]
            record = records[0]
            return record, [
                Message(type="success", text=f"No API specified, loading first available: {record.title}")
            ]

        for record in records:
            if slugify(record.title) == api.lower():
                return record, []
        return None, [Message(type="warning", text=f"No API documentation found for: {api}")]

    def _fetch(self, record: ConfigRecord) -> str:
        try:
            data = self.storage.download(record.file_path)
        except StorageError as e:
            raise LoadError(f"Failed to download file: {e}") from e
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LoadError(f"Failed to parse content: {e}") from e
