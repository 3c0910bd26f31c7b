"""PDF rendering with reportlab."""

import io
import logging
import xml.sax.saxutils as saxutils

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from famdocs.engine.models import LayoutBlock, LayoutKind
from famdocs.interfaces.renderer import BaseDocumentRenderer

logger = logging.getLogger(__name__)


class PdfDocumentRenderer(BaseDocumentRenderer):
    """A4 letters set in Helvetica."""

    def __init__(self, font_size: int = 11) -> None:
        self.font_size = font_size
        self.styles = getSampleStyleSheet()
        self._setup_styles()

    def _setup_styles(self) -> None:
        leading = self.font_size * 1.35
        self.styles.add(ParagraphStyle(
            name="LetterTitle",
            parent=self.styles["Normal"],
            fontName="Helvetica-Bold",
            fontSize=14,
            leading=18,
            alignment=TA_CENTER,
            spaceAfter=0.8 * cm,
        ))
        self.styles.add(ParagraphStyle(
            name="LetterHeading",
            parent=self.styles["Normal"],
            fontName="Helvetica-Bold",
            fontSize=self.font_size,
            leading=leading,
            spaceAfter=0.4 * cm,
        ))
        self.styles.add(ParagraphStyle(
            name="LetterFillable",
            parent=self.styles["Normal"],
            fontName="Helvetica",
            fontSize=self.font_size,
            leading=leading * 1.4,
            spaceBefore=0.15 * cm,
            spaceAfter=0.15 * cm,
        ))
        self.styles.add(ParagraphStyle(
            name="LetterBody",
            parent=self.styles["Normal"],
            fontName="Helvetica",
            fontSize=self.font_size,
            leading=leading,
            spaceAfter=0.05 * cm,
        ))

    @property
    def content_type(self) -> str:
        return "application/pdf"

    @property
    def extension(self) -> str:
        return "pdf"

    def render(self, title: str, blocks: list[LayoutBlock]) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=2.5 * cm,
            rightMargin=2.5 * cm,
            topMargin=2 * cm,
            bottomMargin=2 * cm,
            title=title,
        )

        style_by_kind = {
            LayoutKind.TITLE: self.styles["LetterTitle"],
            LayoutKind.HEADING: self.styles["LetterHeading"],
            LayoutKind.FILLABLE: self.styles["LetterFillable"],
            LayoutKind.BODY: self.styles["LetterBody"],
        }

        story = []
        for block in blocks:
            if block.kind == LayoutKind.BREAK:
                story.append(Spacer(1, 0.35 * cm))
                continue
            story.append(Paragraph(saxutils.escape(block.text), style_by_kind[block.kind]))

        doc.build(story)
        data = buffer.getvalue()
        logger.debug(f"Built PDF '{title}': {len(data)} bytes")
        return data
