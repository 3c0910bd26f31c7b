"""PDF text-layer extraction with pypdf."""

import asyncio
import logging
from io import BytesIO

from pypdf import PdfReader

from famdocs.interfaces.extractor import BaseTextExtractor

logger = logging.getLogger(__name__)


class PypdfTextExtractor(BaseTextExtractor):
    """Reads the embedded text of born-digital PDFs.

    Scanned PDFs have no text layer (or only a few stray characters); they
    yield None so that the caller can fall back to OCR.

    Attributes:
        max_bytes: Larger payloads are refused.
        min_length: Shorter texts are treated as "no text".
        max_length: Longer texts are truncated.
    """

    def __init__(
        self,
        max_bytes: int = 10 * 1024 * 1024,
        min_length: int = 10,
        max_length: int = 10_000,
    ) -> None:
        self.max_bytes = max_bytes
        self.min_length = min_length
        self.max_length = max_length

    async def extract_text(self, data: bytes) -> str | None:
        if len(data) > self.max_bytes:
            raise ValueError(f"PDF too large for text extraction: {len(data)} bytes")
        return await asyncio.to_thread(self._extract_sync, data)

    def _extract_sync(self, data: bytes) -> str | None:
        reader = PdfReader(BytesIO(data))
        pages = []
        for page in reader.pages:
            pages.append(page.extract_text() or "")

        text = "\n".join(pages).strip()
        if len(text) < self.min_length:
            logger.info(f"PDF text layer too short ({len(text)} chars), likely a scan")
            return None

        logger.debug(f"Extracted {len(text)} chars from {len(reader.pages)} page(s)")
        return text[: self.max_length]
