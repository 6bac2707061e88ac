"""
Storage module with abstraction layer.

This module provides:
- URLStore interface: Abstract base class for entry storage
- InMemoryURLStore, JSONFileURLStore, SQLURLStore: the implementations
- get_url_store(): builds the store selected by STORAGE_BACKEND
"""

from shorturl.db.factory import get_url_store
from shorturl.db.interface import URLStore
from shorturl.db.json_store import JSONFileURLStore
from shorturl.db.memory_store import InMemoryURLStore
from shorturl.db.models import ShortURL, URLEntry
from shorturl.db.sql_store import SQLURLStore

__all__ = [
    "URLStore",
    "URLEntry",
    "ShortURL",
    "InMemoryURLStore",
    "JSONFileURLStore",
    "SQLURLStore",
    "get_url_store",
]
