"""
API subpackage: persistence backends for tracking records.
"""

from .store import (
    ObjectStore,
    MemoryStore,
    SQLiteStore,
    StoreSchema,
    STORE_SCHEMAS,
    normalize_key,
)

__all__ = [
    "ObjectStore",
    "MemoryStore",
    "SQLiteStore",
    "StoreSchema",
    "STORE_SCHEMAS",
    "normalize_key",
]
