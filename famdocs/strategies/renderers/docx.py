"""Word rendering with python-docx."""

import io
import logging

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from famdocs.engine.models import LayoutBlock, LayoutKind
from famdocs.interfaces.renderer import BaseDocumentRenderer

logger = logging.getLogger(__name__)


class DocxDocumentRenderer(BaseDocumentRenderer):
    """Editable Word letters, for users who prefer to complete blanks on screen."""

    def __init__(self, font_name: str = "Arial", font_size: int = 11) -> None:
        self.font_name = font_name
        self.font_size = font_size

    @property
    def content_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    @property
    def extension(self) -> str:
        return "docx"

    def render(self, title: str, blocks: list[LayoutBlock]) -> bytes:
        doc = Document()
        doc.core_properties.title = title

        normal = doc.styles["Normal"]
        normal.font.name = self.font_name
        normal.font.size = Pt(self.font_size)

        for block in blocks:
            if block.kind == LayoutKind.BREAK:
                doc.add_paragraph()
                continue

            paragraph = doc.add_paragraph()
            run = paragraph.add_run(block.text)
            fmt = paragraph.paragraph_format
            fmt.space_after = Pt(2)

            match block.kind:
                case LayoutKind.TITLE:
                    run.bold = True
                    run.font.size = Pt(14)
                    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
                    fmt.space_after = Pt(18)
                case LayoutKind.HEADING:
                    run.bold = True
                    fmt.space_after = Pt(10)
                case LayoutKind.FILLABLE:
                    fmt.space_before = Pt(4)
                    fmt.space_after = Pt(6)

        buffer = io.BytesIO()
        doc.save(buffer)
        data = buffer.getvalue()
        logger.debug(f"Built DOCX '{title}': {len(data)} bytes")
        return data
