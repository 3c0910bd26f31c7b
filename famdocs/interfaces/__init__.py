"""Abstract base classes for the engine's collaborators."""

from famdocs.interfaces.cache import MISSING, BaseCache
from famdocs.interfaces.extractor import BaseOcrClient, BaseTextExtractor
from famdocs.interfaces.fetcher import AttachmentFetchError, BaseAttachmentFetcher, FetchedAttachment
from famdocs.interfaces.renderer import BaseDocumentRenderer
from famdocs.interfaces.repository import BaseProfileRepository, BaseTaskRepository
from famdocs.interfaces.storage import BaseDocumentStorage, StorageError

__all__ = [
    "MISSING",
    "BaseCache",
    "BaseTextExtractor",
    "BaseOcrClient",
    "BaseAttachmentFetcher",
    "FetchedAttachment",
    "AttachmentFetchError",
    "BaseDocumentRenderer",
    "BaseProfileRepository",
    "BaseTaskRepository",
    "BaseDocumentStorage",
    "StorageError",
]
