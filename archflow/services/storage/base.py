"""
Storage capabilities used by the status and result stores.

Callers depend only on these protocols; the concrete implementation
(in-memory or remote) is chosen by configuration in ``factory.py``.
"""

from typing import Protocol


class StorageError(Exception):
    """A storage backend failed to read or write."""


class KeyValueStore(Protocol):
    """String key/value store with optional per-key expiry."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None: ...

    async def delete(self, key: str) -> None: ...


class BlobStore(Protocol):
    """Text blob store addressed by path-like keys."""

    async def put(self, key: str, data: str) -> str:
        """Store ``data`` under ``key`` and return its URL."""
        ...

    async def get(self, key: str) -> str | None: ...

    async def exists(self, key: str) -> bool: ...

    async def delete(self, key: str) -> None: ...
