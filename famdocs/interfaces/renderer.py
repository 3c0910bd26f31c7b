"""Document byte rendering interface."""

from abc import ABC, abstractmethod

from famdocs.engine.models import LayoutBlock


class BaseDocumentRenderer(ABC):
    """Abstract base class for output format strategies.

    A renderer turns laid-out lines into a file. It never sees variables or
    templates: the content it receives is final.
    """

    @abstractmethod
    def render(self, title: str, blocks: list[LayoutBlock]) -> bytes:
        """Render a document.

        Args:
            title: Document title, used for file metadata.
            blocks: Laid-out lines, title block first.

        Returns:
            The encoded document.
        """

    @property
    @abstractmethod
    def content_type(self) -> str:
        """Media type of the produced files."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension of the produced files, without the dot."""
