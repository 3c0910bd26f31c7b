"""In-process cache with per-entry expiry."""

import logging
import time
from collections.abc import Callable
from typing import Any

from famdocs.interfaces.cache import MISSING, BaseCache

logger = logging.getLogger(__name__)


class MemoryCache(BaseCache):
    """Dictionary cache. Expired entries are dropped when read.

    Attributes:
        max_entries: When full, expired entries are purged, then the oldest.
    """

    def __init__(self, max_entries: int = 512, clock: Callable[[], float] = time.monotonic) -> None:
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return MISSING
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return MISSING
        return value

    def put(self, key: str, value: Any, ttl: float) -> None:
        if key not in self._entries and len(self._entries) >= self.max_entries:
            self._evict()
        self._entries[key] = (self._clock() + ttl, value)

    def _evict(self) -> None:
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        if len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        logger.debug(f"Cache eviction: {len(expired)} expired entries removed")

    def __len__(self) -> int:
        return len(self._entries)
