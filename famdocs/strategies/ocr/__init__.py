"""Concrete OCR client implementations."""

from famdocs.strategies.ocr.ocr_space import OcrSpaceClient

__all__ = [
    "OcrSpaceClient",
]
