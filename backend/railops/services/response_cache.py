"""
In-memory response cache with time-based expiry.

Responses are stored as encoded JSON so a cached payload is a snapshot:
later registry changes (or callers mutating the dict they were handed)
never leak into an entry that was already stored.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Callable

from railops.core.metrics import record_cache_event

logger = logging.getLogger(__name__)


class ResponseCache:
    """
    Time-expiring key -> JSON payload store.

    Entries become invisible as soon as their TTL has elapsed. Expired
    entries are dropped lazily on read and opportunistically on write;
    `clear()` removes everything regardless of expiry.
    """

    def __init__(
        self,
        ttl_seconds: int,
        *,
        name: str = "response",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"Cache TTL must be positive: {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock
        self._store: dict[str, tuple[str, float]] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._store)

    async def get_json(self, key: str) -> Any | None:
        """Return the decoded payload, or None if absent or expired."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            encoded, expires_at = entry
            if expires_at <= self._clock():
                del self._store[key]
                record_cache_event(self.name, "expired")
                return None

        return json.loads(encoded)

    async def set_json(
        self, key: str, value: Any, ttl_seconds: int | None = None
    ) -> None:
        """Serialize and store a payload; last write for a key wins."""
        encoded = json.dumps(value)
        ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else self.ttl_seconds
        expires_at = self._clock() + ttl

        async with self._lock:
            self._store[key] = (encoded, expires_at)
        record_cache_event(self.name, "store")
        await self.cleanup_expired()

    async def delete(self, key: str) -> None:
        """Delete a single entry."""
        async with self._lock:
            self._store.pop(key, None)

    async def clear(self) -> int:
        """Remove every entry immediately. Returns how many were dropped."""
        async with self._lock:
            dropped = len(self._store)
            self._store.clear()
        record_cache_event(self.name, "clear")
        return dropped

    async def cleanup_expired(self) -> int:
        """Remove all expired entries from the store."""
        now = self._clock()
        async with self._lock:
            expired_keys = [
                key for key, (_, expires_at) in self._store.items() if expires_at <= now
            ]
            for key in expired_keys:
                del self._store[key]

        if expired_keys:
            logger.debug("Evicted %s expired %s cache entries", len(expired_keys), self.name)
        return len(expired_keys)


__all__ = ["ResponseCache"]
