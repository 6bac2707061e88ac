"""
JSON File URL Store

Persists entries as a JSON array in a single file:

    [
      {"original_url": "https://example.com", "short_url": 412},
      ...
    ]

Key characteristics:
- The file is created with an empty array on first use
- Every read loads the whole file, so edits made by other tools between
  requests are visible
- Writes go to a temporary file that is renamed over the original, so a
  crash mid-write never leaves a truncated file behind
- Blocking file I/O runs in a worker thread to keep the event loop free

A file that exists but can't be parsed raises DatabaseError. It is never
silently reset, since that would drop every registered URL.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from shorturl.core.exceptions import DatabaseError, DuplicateEntryError
from shorturl.db.interface import URLStore
from shorturl.db.models import URLEntry

logger = logging.getLogger(__name__)


class JSONFileURLStore(URLStore):
    """URL store backed by a JSON file on disk."""

    name = "json"

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    async def initialize(self) -> None:
        await asyncio.to_thread(self._ensure_file_exists)

    async def list_entries(self) -> list[URLEntry]:
        records = await asyncio.to_thread(self._read_records)
        try:
            return [URLEntry.from_record(record) for record in records]
        except (KeyError, TypeError, ValidationError) as e:
            raise DatabaseError(f"Malformed entry in {self.file_path}", original_error=e)

    async def add_entry(self, entry: URLEntry) -> None:
        await asyncio.to_thread(self._append_record, entry)

    def _ensure_file_exists(self) -> None:
        if self.file_path.exists():
            return
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self._write_records([])
        except OSError as e:
            raise DatabaseError(f"Cannot create {self.file_path}", original_error=e)
        logger.info(f"Created empty URL store at {self.file_path}")

    def _read_records(self) -> list:
        if not self.file_path.exists():
            self._ensure_file_exists()
            return []

        try:
            raw_data = self.file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise DatabaseError(f"Cannot read {self.file_path}", original_error=e)

        # An empty file is treated like an empty array
        if not raw_data.strip():
            return []

        try:
            records = json.loads(raw_data)
        except json.JSONDecodeError as e:
            raise DatabaseError(f"{self.file_path} is not valid JSON", original_error=e)

        if not isinstance(records, list):
            raise DatabaseError(f"{self.file_path} must contain a JSON array")
        return records

    def _append_record(self, entry: URLEntry) -> None:
        records = self._read_records()
        for record in records:
            if record.get("original_url") == entry.original_url or record.get("short_url") == entry.short_code:
                raise DuplicateEntryError(entry.original_url, entry.short_code)

        records.append(entry.to_record())
        try:
            self._write_records(records)
        except OSError as e:
            raise DatabaseError(f"Cannot write {self.file_path}", original_error=e)

    def _write_records(self, records: list) -> None:
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.file_path.name}.", dir=self.file_path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                json.dump(records, tmp_file, indent=2)
            os.replace(tmp_path, self.file_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
