"""Concrete document storage implementations."""

from famdocs.strategies.storage.local import LocalDocumentStorage
from famdocs.strategies.storage.supabase import SupabaseDocumentStorage

__all__ = [
    "LocalDocumentStorage",
    "SupabaseDocumentStorage",
]
