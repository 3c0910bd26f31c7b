"""Concrete profile and task repository implementations."""

from famdocs.strategies.repositories.json_store import JsonFileRepository, normalize_user_id, snake_keys

__all__ = [
    "JsonFileRepository",
    "normalize_user_id",
    "snake_keys",
]
