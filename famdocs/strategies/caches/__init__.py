"""Concrete cache implementations."""

from famdocs.strategies.caches.memory import MemoryCache

__all__ = [
    "MemoryCache",
]
