"""Text extraction interfaces for attachments.

Two strategies cooperate: a text-layer extractor for born-digital PDFs and
an OCR client used as a fallback for scans and photos.
"""

from abc import ABC, abstractmethod


class BaseTextExtractor(ABC):
    """Abstract base class for text-layer extraction strategies."""

    @abstractmethod
    async def extract_text(self, data: bytes) -> str | None:
        """Extract the embedded text of a document.

        Args:
            data: Raw document bytes.

        Returns:
            The extracted text, truncated to the configured maximum, or None
            when the document has no usable text layer (likely a scan).

        Raises:
            ValueError: If the payload exceeds the size limit.
        """


class BaseOcrClient(ABC):
    """Abstract base class for OCR strategies.

    OCR is best effort: implementations return None instead of raising when
    the service is unavailable or not configured.
    """

    @abstractmethod
    async def ocr_text(self, url: str) -> str | None:
        """Recognise the text of a remote image or PDF.

        Args:
            url: URL of the file to read.

        Returns:
            The recognised text, or None.
        """
