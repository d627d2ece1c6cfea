"""Time-bounded cache for resolved regions and tags.

Region membership and WA lists change slowly relative to one sending
session, so lookups are reused for a configurable TTL. Concurrent
lookups of the same key share one fetch.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Hashable, Optional

logger = logging.getLogger("communique.nsapi.cache")


class TTLCache:
    """Async cache of list values with per-entry expiry."""

    def __init__(self, ttl_seconds: float = 900.0, clock=time.monotonic):
        self.ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, list[str]]] = {}
        # key -> [lock, number of callers holding or waiting on it]
        self._key_locks: dict[Hashable, list] = {}

    def get(self, key: Hashable) -> Optional[list[str]]:
        """Return a fresh copy of the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl:
            del self._entries[key]
            return None
        return list(value)

    def put(self, key: Hashable, value: list[str]):
        self._entries[key] = (self._clock(), list(value))

    async def get_or_load(
        self,
        key: Hashable,
        loader: Callable[[], Awaitable[list[str]]],
    ) -> list[str]:
        """Return the cached value for key, loading it once if absent.

        Loader errors propagate and nothing is cached. A key's lock lives
        only while some caller is loading or waiting on that key.
        """
        slot = self._key_locks.get(key)
        if slot is None:
            slot = self._key_locks[key] = [asyncio.Lock(), 0]
        slot[1] += 1

        try:
            async with slot[0]:
                cached = self.get(key)
                if cached is not None:
                    logger.debug(f"Cache hit: {key}")
                    return cached
                value = await loader()
                self.put(key, value)
                return list(value)
        finally:
            slot[1] -= 1
            if slot[1] == 0:
                del self._key_locks[key]

    def __len__(self) -> int:
        return len(self._entries)
