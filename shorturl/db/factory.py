"""
URL Store Factory

Picks the store implementation named by STORAGE_BACKEND. This is the only
place that knows the concrete store classes; everything else talks to the
URLStore interface.
"""

from shorturl.core.setting import Settings, StorageBackend
from shorturl.db.interface import URLStore
from shorturl.db.json_store import JSONFileURLStore
from shorturl.db.memory_store import InMemoryURLStore
from shorturl.db.sql_store import SQLURLStore


def get_url_store(config: Settings) -> URLStore:
    """
    Build the URL store configured in settings.

    Returns:
        URLStore instance (not yet initialized)
    """
    backend = StorageBackend(config.STORAGE_BACKEND)

    if backend is StorageBackend.memory:
        return InMemoryURLStore()
    if backend is StorageBackend.json:
        return JSONFileURLStore(config.DATA_FILE)
    return SQLURLStore(config.DATABASE_URL)
