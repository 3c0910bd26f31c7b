"""Concrete strategy implementations."""

from famdocs.strategies.caches import (
    MemoryCache,
)
from famdocs.strategies.extractors import (
    PypdfTextExtractor,
)
from famdocs.strategies.fetchers import (
    HttpAttachmentFetcher,
)
from famdocs.strategies.ocr import (
    OcrSpaceClient,
)
from famdocs.strategies.renderers import (
    DocxDocumentRenderer,
    PdfDocumentRenderer,
)
from famdocs.strategies.repositories import (
    JsonFileRepository,
)
from famdocs.strategies.storage import (
    LocalDocumentStorage,
    SupabaseDocumentStorage,
)

__all__ = [
    "MemoryCache",
    "PypdfTextExtractor",
    "HttpAttachmentFetcher",
    "OcrSpaceClient",
    "PdfDocumentRenderer",
    "DocxDocumentRenderer",
    "JsonFileRepository",
    "LocalDocumentStorage",
    "SupabaseDocumentStorage",
]
