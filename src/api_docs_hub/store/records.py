"""Metadata records for uploaded API definitions, kept in a JSON file."""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConfigRecord(BaseModel):
    """One uploaded API definition."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str
    file_path: str
    file_name: str
    file_size: int
    file_type: str  # json / yaml / yml, or whatever extension was uploaded
    uploaded_at: str = Field(default_factory=_now)
    user_id: str | None = None
    created_at: str = Field(default_factory=_now)
    updated_at: str = Field(default_factory=_now)


class RecordStoreError(Exception):
    """The record file could not be read or written."""


class RecordStore:
    """Append-only table of ConfigRecord persisted as a JSON array."""

    def __init__(self, path: Path):
        self.path = path

    def all(self) -> list[ConfigRecord]:
        """All records in insertion order."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [ConfigRecord(**item) for item in data]
        except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
            raise RecordStoreError(f"Cannot read {self.path}: {e}") from e

    def newest_first(self) -> list[ConfigRecord]:
        return sorted(self.all(), key=lambda r: r.created_at, reverse=True)

    def insert(self, record: ConfigRecord) -> ConfigRecord:
        records = self.all()
        records.append(record)
        self._write(records)
        logger.debug("Inserted record %s (%s)", record.id, record.title)
        return record

    def _write(self, records: list[ConfigRecord]) -> None:
        payload = json.dumps([r.model_dump() for r in records], indent=2, ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise RecordStoreError(f"Cannot write {self.path}: {e}") from e
