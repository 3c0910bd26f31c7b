"""Template filling and line layout."""

import asyncio
import logging
from collections.abc import Mapping

from famdocs.engine.models import BLANK_MARKER, LayoutBlock, LayoutKind, Template
from famdocs.engine.normalizer import normalize_text, substitute_placeholders
from famdocs.interfaces.renderer import BaseDocumentRenderer

logger = logging.getLogger(__name__)

SECTION_PREFIXES = ("Objet :", "ATTESTATION", "PROCURATION", "AUTORISATION", "INSCRIPTION")


def fill(template: Template, variables: Mapping[str, str]) -> str:
    """Substitute variables into a template body.

    Placeholders are replaced in one pass: non-blank values are inserted,
    anything else becomes the blank-line marker. The result is normalized.
    """
    return normalize_text(substitute_placeholders(template.body, variables))


def layout(label: str, content: str) -> list[LayoutBlock]:
    """Classify each line of filled content for the byte renderers."""
    blocks = [LayoutBlock(kind=LayoutKind.TITLE, text=label)]
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped:
            kind = LayoutKind.BREAK
        elif stripped.startswith(SECTION_PREFIXES):
            kind = LayoutKind.HEADING
        elif BLANK_MARKER in stripped:
            kind = LayoutKind.FILLABLE
        else:
            kind = LayoutKind.BODY
        blocks.append(LayoutBlock(kind=kind, text=line.rstrip()))
    return blocks


class TemplateRenderer:
    """Fills templates and encodes them with a document renderer strategy."""

    def __init__(self, document_renderer: BaseDocumentRenderer) -> None:
        self.document_renderer = document_renderer

    @property
    def content_type(self) -> str:
        return self.document_renderer.content_type

    @property
    def extension(self) -> str:
        return self.document_renderer.extension

    async def render(self, template: Template, variables: Mapping[str, str]) -> tuple[str, bytes]:
        """Fill a template and encode it.

        Returns:
            The filled text content and the document bytes.
        """
        content = fill(template, variables)
        blocks = layout(template.label, content)
        data = await asyncio.to_thread(self.document_renderer.render, template.label, blocks)
        logger.info(f"Rendered {template.id}: {len(blocks)} blocks, {len(data)} bytes")
        return content, data
