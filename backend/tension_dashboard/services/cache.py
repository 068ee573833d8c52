"""
Time-bounded cache for the last computed news response.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    data: T
    fetched_at: datetime

    def is_fresh(self, now: datetime, ttl_ms: int) -> bool:
        return now - self.fetched_at < timedelta(milliseconds=ttl_ms)


class ResponseCache(Generic[T]):
    """Single-entry cache; the query is fixed so there is no key.

    Refreshes run one at a time: concurrent callers that find the entry stale
    wait for the in-flight refresh and then reuse its result.
    """

    def __init__(self) -> None:
        self._entry: Optional[CacheEntry[T]] = None
        self._lock = asyncio.Lock()

    @property
    def entry(self) -> Optional[CacheEntry[T]]:
        return self._entry

    def invalidate(self) -> None:
        self._entry = None

    async def get_or_refresh(
        self,
        ttl_ms: int,
        now: datetime,
        refresh: Callable[[], Awaitable[T]],
    ) -> CacheEntry[T]:
        """
        Return the cached entry if younger than ``ttl_ms``, otherwise refresh it.

        Args:
            ttl_ms: Time to live in milliseconds
            now: Current time
            refresh: Coroutine function producing fresh data

        Returns:
            The fresh or newly stored CacheEntry

        Raises:
            Whatever ``refresh`` raises; the previous entry is kept in that case
        """
        entry = self._entry
        if entry is not None and entry.is_fresh(now, ttl_ms):
            logger.debug("Cache hit (fetched at %s)", entry.fetched_at.isoformat())
            return entry

        async with self._lock:
            # Another caller may have refreshed while we waited
            entry = self._entry
            if entry is not None and entry.is_fresh(now, ttl_ms):
                return entry

            logger.info("Cache miss, refreshing")
            data = await refresh()
            entry = CacheEntry(data=data, fetched_at=now)
            self._entry = entry
            return entry
