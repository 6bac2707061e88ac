"""
In-Memory URL Store

Keeps entries in a Python list for the lifetime of the process. Used by the
test suite and for throwaway local runs (STORAGE_BACKEND=memory).
"""

from typing import Iterable, Optional

from shorturl.core.exceptions import DuplicateEntryError
from shorturl.db.interface import URLStore
from shorturl.db.models import URLEntry


class InMemoryURLStore(URLStore):
    """URL store backed by a list. Nothing survives a restart."""

    name = "memory"

    def __init__(self, entries: Optional[Iterable[URLEntry]] = None):
        self._entries: list[URLEntry] = list(entries or [])

    async def list_entries(self) -> list[URLEntry]:
        # Copy so callers can't append behind the store's back
        return list(self._entries)

    async def add_entry(self, entry: URLEntry) -> None:
        for existing in self._entries:
            if existing.original_url == entry.original_url or existing.short_code == entry.short_code:
                raise DuplicateEntryError(entry.original_url, entry.short_code)
        self._entries.append(entry)
