"""
URL Store Abstraction Interface

This module defines the storage contract the registry depends on. The
registry never knows whether entries live in memory, in a JSON file or in a
SQL table; it only sees an ordered, durable list of URLEntry values.

To add a new storage backend:
1. Create a new class inheriting from URLStore
2. Implement list_entries() and add_entry()
3. Optionally override the find_* methods with indexed lookups
4. Register it in get_url_store() in shorturl/db/factory.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from shorturl.db.models import URLEntry


class URLStore(ABC):
    """
    Abstract base class for URL stores.

    Stores keep entries in insertion order and never update or delete them.
    Serializing writes is the registry's job; a store only has to make a
    single append atomic and may refuse it with DuplicateEntryError.
    """

    name: str = "abstract"

    async def initialize(self) -> None:
        """Create the backing file or table if it does not exist yet."""

    async def close(self) -> None:
        """Release connections or handles held by the store."""

    @abstractmethod
    async def list_entries(self) -> list[URLEntry]:
        """
        Load every entry in insertion order.

        Raises:
            DatabaseError: If the persisted data cannot be read or parsed
        """
        pass

    @abstractmethod
    async def add_entry(self, entry: URLEntry) -> None:
        """
        Append a new entry.

        Raises:
            DuplicateEntryError: If the URL or the code is already stored
            DatabaseError: If the write fails
        """
        pass

    async def count_entries(self) -> int:
        """Number of stored entries."""
        return len(await self.list_entries())

    async def find_by_url(self, original_url: str) -> Optional[URLEntry]:
        """Return the entry registered for original_url, if any."""
        for entry in await self.list_entries():
            if entry.original_url == original_url:
                return entry
        return None

    async def find_by_code(self, short_code: int) -> Optional[URLEntry]:
        """Return the entry registered under short_code, if any."""
        for entry in await self.list_entries():
            if entry.short_code == short_code:
                return entry
        return None
