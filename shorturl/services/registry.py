"""
URL Registry

Single source of truth for the short code <-> URL mapping.

- register(): returns the existing entry for a URL, or mints a new code and
  appends a new entry
- lookup(): resolves a code back to its entry

Design Decisions:
- Codes are random integers, not sequential. The range grows with the
  table, max(1000, entries * 1000), so it stays roughly 1000x sparser than
  the number of codes in use and collisions are rare.
- Generation gives up after a fixed number of draws. Hitting the cap means
  the range sizing failed; it is reported, not papered over with a
  sequential fallback.
- State is re-read from the store on every call; the registry keeps no cache.
- The read-check-write in register() runs under an asyncio.Lock, so two
  concurrent registrations can't both see the same code or URL as free.
"""

import asyncio
import logging
import random
from typing import Collection, Optional

from shorturl.core.exceptions import (
    CodeSpaceExhaustedError,
    DuplicateEntryError,
    ShortCodeNotFoundError,
)
from shorturl.db.interface import URLStore
from shorturl.db.models import URLEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100
DEFAULT_RANGE_MULTIPLIER = 1000


def code_upper_bound(entry_count: int, range_multiplier: int = DEFAULT_RANGE_MULTIPLIER) -> int:
    """
    Upper bound of the random code range for a table of entry_count entries.

    Example:
        code_upper_bound(0) -> 1000
        code_upper_bound(1) -> 1000
        code_upper_bound(7) -> 7000
    """
    return max(range_multiplier, entry_count * range_multiplier)


def generate_short_code(
    existing_codes: Collection[int],
    entry_count: int,
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    range_multiplier: int = DEFAULT_RANGE_MULTIPLIER,
) -> int:
    """
    Draw a random short code that is not in existing_codes.

    Args:
        existing_codes: Codes already in use
        entry_count: Number of stored entries (sizes the range)
        rng: Random source (defaults to the module-level generator)
        max_attempts: Draws allowed before giving up
        range_multiplier: Scales the range with the table size

    Returns:
        A code in [1, code_upper_bound(entry_count)]

    Raises:
        CodeSpaceExhaustedError: If every draw collided
    """
    rng = rng or random
    upper_bound = code_upper_bound(entry_count, range_multiplier)

    for _ in range(max_attempts):
        candidate = rng.randint(1, upper_bound)
        if candidate not in existing_codes:
            return candidate

    raise CodeSpaceExhaustedError(max_attempts, upper_bound)


class URLRegistry:
    """
    Registers URLs and resolves short codes.

    One instance is built at application startup and handed to request
    handlers; it owns the lock that serializes writes to its store.
    """

    def __init__(
        self,
        store: URLStore,
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        range_multiplier: int = DEFAULT_RANGE_MULTIPLIER,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.range_multiplier = range_multiplier
        self._write_lock = asyncio.Lock()

    async def register(self, normalized_url: str) -> URLEntry:
        """
        Register a normalized URL and return its entry.

        Registering a URL that is already stored returns the stored entry
        unchanged; no new code is minted and nothing is written.

        Raises:
            CodeSpaceExhaustedError: If no free code could be drawn
            DatabaseError: If the store can't be read or written
        """
        entry, _ = await self.register_or_get(normalized_url)
        return entry

    async def register_or_get(self, normalized_url: str) -> tuple[URLEntry, bool]:
        """
        Like register(), but also report whether a new entry was created.

        Returns:
            (entry, created) where created is False for an existing URL
        """
        async with self._write_lock:
            entries = await self.store.list_entries()

            for entry in entries:
                if entry.original_url == normalized_url:
                    logger.debug(f"URL already registered as {entry.short_code}: {normalized_url}")
                    return entry, False

            try:
                short_code = generate_short_code(
                    {entry.short_code for entry in entries},
                    len(entries),
                    rng=self.rng,
                    max_attempts=self.max_attempts,
                    range_multiplier=self.range_multiplier,
                )
            except CodeSpaceExhaustedError as e:
                logger.error(f"Short code space exhausted for {normalized_url}: {e}")
                raise

            new_entry = URLEntry(original_url=normalized_url, short_code=short_code)
            try:
                await self.store.add_entry(new_entry)
            except DuplicateEntryError:
                # Another writer on the same store got there first
                existing = await self.store.find_by_url(normalized_url)
                if existing is not None:
                    return existing, False
                raise

        logger.info(f"Registered {normalized_url} as {short_code}")
        return new_entry, True

    async def lookup(self, short_code: int) -> URLEntry:
        """
        Resolve a short code to its entry.

        Raises:
            ShortCodeNotFoundError: If the code is not registered
        """
        entry = await self.store.find_by_code(short_code)
        if entry is None:
            raise ShortCodeNotFoundError(short_code)
        return entry

    async def count(self) -> int:
        """Number of registered entries."""
        return await self.store.count_entries()
