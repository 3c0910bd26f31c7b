"""Attachment fetching interface.

Attachments are remote files (PDF invoices, photos of letters) referenced by
a task. Fetchers only move bytes; reading them is left to the extractors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class AttachmentFetchError(Exception):
    """Raised when an attachment cannot be downloaded."""


@dataclass(frozen=True)
class FetchedAttachment:
    """Raw attachment payload.

    Attributes:
        url: The URL the bytes were fetched from.
        data: The response body.
        content_type: Media type announced by the server, lowercased, without
            parameters. Empty when the server sent none.
    """

    url: str
    data: bytes
    content_type: str = ""

    @property
    def is_pdf(self) -> bool:
        """True when the payload is a PDF, by media type or magic bytes."""
        return "pdf" in self.content_type or self.data[:5] == b"%PDF-"


class BaseAttachmentFetcher(ABC):
    """Abstract base class for attachment download strategies."""

    @abstractmethod
    async def fetch_bytes(self, url: str) -> FetchedAttachment:
        """Download an attachment.

        Args:
            url: Public or signed URL of the attachment.

        Returns:
            The fetched payload.

        Raises:
            AttachmentFetchError: If the download fails or the payload is
                larger than the configured limit.
        """
