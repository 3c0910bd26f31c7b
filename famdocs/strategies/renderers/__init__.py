"""Concrete document renderer implementations."""

from famdocs.strategies.renderers.docx import DocxDocumentRenderer
from famdocs.strategies.renderers.pdf import PdfDocumentRenderer

__all__ = [
    "PdfDocumentRenderer",
    "DocxDocumentRenderer",
]
