"""
Storage package.

- base.py: KeyValueStore / BlobStore protocols and StorageError
- memory.py: In-process implementations (development, tests)
- remote.py: Redis REST key/value store and S3-compatible blob store
- factory.py: Backend selection from settings
"""

from archflow.services.storage.base import BlobStore, KeyValueStore, StorageError
from archflow.services.storage.factory import build_stores
from archflow.services.storage.memory import MemoryBlobStore, MemoryKeyValueStore
from archflow.services.storage.remote import RestKeyValueStore, S3BlobStore

__all__ = [
    "BlobStore",
    "KeyValueStore",
    "StorageError",
    "build_stores",
    "MemoryBlobStore",
    "MemoryKeyValueStore",
    "RestKeyValueStore",
    "S3BlobStore",
]
