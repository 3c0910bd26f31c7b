"""Concrete attachment fetcher implementations."""

from famdocs.strategies.fetchers.http import HttpAttachmentFetcher

__all__ = [
    "HttpAttachmentFetcher",
]
