"""
In-memory storage backends for local development and tests.

Expiry is handled by cachetools: each entry carries its own TTL and the
cache's time-to-use function turns it into an absolute deadline.
"""

import logging
import math
import time
from collections.abc import Callable

from cachetools import TLRUCache  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

MAX_KV_ENTRIES = 10_000


def _time_to_use(_key: str, value: tuple[str, float | None], now: float) -> float:
    """Absolute expiry for an entry stored as (payload, ttl_seconds)."""
    ttl = value[1]
    return math.inf if ttl is None else now + ttl


class MemoryKeyValueStore:
    """Process-local key/value store with per-key TTL."""

    def __init__(
        self,
        maxsize: int = MAX_KV_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TLRUCache[str, tuple[str, float | None]] = TLRUCache(
            maxsize=maxsize, ttu=_time_to_use, timer=timer
        )

    async def get(self, key: str) -> str | None:
        entry = self._cache.get(key)
        return entry[0] if entry is not None else None

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self._cache[key] = (value, ttl_seconds)
        logger.debug(f"[KV] Set key: {key}, size: {len(self._cache)} items")

    async def delete(self, key: str) -> None:
        self._cache.pop(key, None)


class MemoryBlobStore:
    """Process-local blob store returning mock URLs."""

    def __init__(self, base_url: str = "http://localhost:8000/mock-blob") -> None:
        self._blobs: dict[str, str] = {}
        self._base_url = base_url.rstrip("/")

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    async def put(self, key: str, data: str) -> str:
        self._blobs[key] = data
        return self.url_for(key)

    async def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    async def exists(self, key: str) -> bool:
        return key in self._blobs

    async def delete(self, key: str) -> None:
        self._blobs.pop(key, None)
