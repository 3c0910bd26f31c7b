"""Key/value cache interface with per-entry expiry."""

from abc import ABC, abstractmethod
from typing import Any, Final


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


# Returned by ``BaseCache.get`` on a miss, so that ``None`` can be cached.
MISSING: Final = _Missing()


class BaseCache(ABC):
    """Abstract base class for cache strategies."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the cached value, or ``MISSING`` when absent or expired."""

    @abstractmethod
    def put(self, key: str, value: Any, ttl: float) -> None:
        """Store a value for ``ttl`` seconds."""
