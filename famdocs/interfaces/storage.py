"""Generated document storage interface."""

from abc import ABC, abstractmethod


class BaseDocumentStorage(ABC):
    """Abstract base class for document storage strategies."""

    @abstractmethod
    async def upload(self, data: bytes, filename: str, content_type: str) -> str | None:
        """Store a generated document.

        Args:
            data: Document bytes.
            filename: Target file name.
            content_type: Media type of the document.

        Returns:
            A URL or path where the document can be retrieved, or None when
            the backend gives no address.

        Raises:
            StorageError: If the upload fails.
        """


class StorageError(Exception):
    """Raised when a document cannot be stored."""
