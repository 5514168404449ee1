"""
Storage backends for listing data and image bytes.
"""

from .base import Storage
from .memory import MemoryStorage
from .sql import SqlStorage
from .object_store import (
    ObjectStore,
    LocalObjectStore,
    DatabaseObjectStore,
    MemoryObjectStore,
    create_object_store,
)
from .seed import seed_storage
from .migrate import migrate_legacy_uploads

__all__ = [
    "Storage",
    "MemoryStorage",
    "SqlStorage",
    "ObjectStore",
    "LocalObjectStore",
    "DatabaseObjectStore",
    "MemoryObjectStore",
    "create_object_store",
    "seed_storage",
    "migrate_legacy_uploads",
]
