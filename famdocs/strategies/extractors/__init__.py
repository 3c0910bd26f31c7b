"""Concrete text extractor implementations."""

from famdocs.strategies.extractors.pdf import PypdfTextExtractor

__all__ = [
    "PypdfTextExtractor",
]
