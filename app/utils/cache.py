import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, NamedTuple, Optional

logger = logging.getLogger(__name__)

# Catalog-shaped queries change slowly upstream
CACHE_TTL_SECONDS = 30 * 60


class CacheEntry(NamedTuple):
    value: Any
    expires_at: float


class TTLCache:
    """
    In-memory cache with a uniform TTL and an optional LRU bound.

    get_or_compute() runs an async producer at most once per key per TTL
    window. Concurrent misses on the same key await the same pending task
    instead of each hitting the upstream API. A failing producer leaves the
    cache untouched so the next call tries again.

    With max_entries=None the cache grows without bound; entries only go
    away when they expire and are replaced.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl = ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._pending: Dict[str, "asyncio.Future[Any]"] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache if it exists and hasn't expired.
        Updates LRU position on hit.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            # Expired, remove it
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """
        Store a value for the cache TTL.
        Evicts the least recently used entry when a bound is configured.
        """
        # Single assignment: readers see the old entry or the new one
        self._entries[key] = CacheEntry(value, self._clock() + self.ttl)
        self._entries.move_to_end(key)

        if self._max_entries and len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"[Cache] Evicted {evicted}")

    def delete(self, key: str) -> None:
        """Delete a value from cache"""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear all values from cache"""
        self._entries.clear()

    async def get_or_compute(self, key: str, producer: Callable[[], Awaitable[Any]]) -> Any:
        entry = self._entries.get(key)
        if entry is not None and self._clock() < entry.expires_at:
            logger.info(f"[Cache] Hit: {key}")
            self._entries.move_to_end(key)
            return entry.value

        pending = self._pending.get(key)
        if pending is not None:
            logger.info(f"[Cache] Waiting on in-flight computation: {key}")
            return await asyncio.shield(pending)

        logger.info(f"[Cache] Miss: {key}")
        task = asyncio.ensure_future(self._compute(key, producer))
        # Marks the exception retrieved even if every waiter was cancelled
        task.add_done_callback(lambda t: t.cancelled() or t.exception())
        self._pending[key] = task
        return await asyncio.shield(task)

    async def _compute(self, key: str, producer: Callable[[], Awaitable[Any]]) -> Any:
        try:
            value = await producer()
            self.set(key, value)
            return value
        finally:
            self._pending.pop(key, None)
