"""Document generation service.

Orchestrates one generation or preview call: template lookup, profile and
task loading, variable resolution, filling, byte rendering and upload.
"""

import logging
import re
import time
import unicodedata
from collections.abc import Mapping
from datetime import date

from famdocs.engine import catalogue
from famdocs.engine.models import PreviewResult, RenderedDocument, Task, Template, VariableSet
from famdocs.engine.renderer import TemplateRenderer, fill
from famdocs.engine.resolver import VariableResolver
from famdocs.interfaces.repository import BaseProfileRepository, BaseTaskRepository
from famdocs.interfaces.storage import BaseDocumentStorage, StorageError

logger = logging.getLogger(__name__)


class TemplateNotFoundError(LookupError):
    """Raised when a template id is not in the catalogue."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Template not found: {template_id}")
        self.template_id = template_id


def document_filename(label: str, extension: str, timestamp_ms: int | None = None) -> str:
    """Build ``<ascii label>_<epoch ms>.<extension>``.

    Example:
        ``"Contestation de facture"`` -> ``"contestation_de_facture_1734000000000.pdf"``
    """
    ascii_label = unicodedata.normalize("NFKD", label).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]", "_", ascii_label.lower())
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{slug}_{timestamp_ms}.{extension}"


def missing_variables(template: Template, variables: VariableSet) -> list[str]:
    """Required variables of ``template`` that resolved to nothing, in template order."""
    return [name for name in template.variables if variables.is_blank(name)]


class DocumentService:
    """Entry point of the document engine.

    Args:
        profiles: Source of user profiles.
        tasks: Source of tasks.
        resolver: Variable resolver (wired with the attachment readers).
        renderer: Template renderer wrapping the output format strategy.
        storage: Where generated documents are uploaded.
    """

    def __init__(
        self,
        profiles: BaseProfileRepository,
        tasks: BaseTaskRepository,
        resolver: VariableResolver,
        renderer: TemplateRenderer,
        storage: BaseDocumentStorage,
    ) -> None:
        self.profiles = profiles
        self.tasks = tasks
        self.resolver = resolver
        self.renderer = renderer
        self.storage = storage

    def get_template(self, template_id: str) -> Template:
        template = catalogue.get_template(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    async def _resolve(
        self,
        template: Template,
        task_id: str | None,
        overrides: Mapping[str, str | None] | None,
        user_id: str | None,
        today: date | None,
    ) -> VariableSet:
        profile = await self.profiles.get_profile(user_id)

        task: Task | None = None
        if task_id:
            task = await self.tasks.get_task(task_id, user_id)
            if task is None:
                logger.warning(f"Task {task_id} not found for user {user_id}; generating without it")

        return await self.resolver.resolve(template, task, profile, overrides, today=today)

    async def generate(
        self,
        template_id: str,
        task_id: str | None = None,
        variables: Mapping[str, str | None] | None = None,
        user_id: str | None = None,
        today: date | None = None,
    ) -> RenderedDocument:
        """Generate a filled document and upload it.

        Args:
            template_id: Catalogue id of the template.
            task_id: Task the document is about, if any.
            variables: Caller overrides; ``""`` leaves a field blank.
            user_id: Owner of the profile and task.
            today: Reference day, defaults to the current date.

        Returns:
            The rendered document. ``document_url`` is None when the upload
            failed.

        Raises:
            TemplateNotFoundError: If the template id is unknown.
        """
        template = self.get_template(template_id)
        resolved = await self._resolve(template, task_id, variables, user_id, today)

        content, data = await self.renderer.render(template, resolved)
        filename = document_filename(template.label, self.renderer.extension)

        document_url: str | None = None
        try:
            document_url = await self.storage.upload(data, filename, self.renderer.content_type)
        except StorageError as e:
            logger.error(f"Upload of {filename} failed: {e}")

        logger.info(
            f"Generated {filename} for template {template_id} "
            f"(task={task_id}, missing={missing_variables(template, resolved)})"
        )
        return RenderedDocument(
            content=content,
            document_bytes=data,
            filename=filename,
            content_type=self.renderer.content_type,
            document_url=document_url,
        )

    async def preview(
        self,
        template_id: str,
        task_id: str | None = None,
        variables: Mapping[str, str | None] | None = None,
        user_id: str | None = None,
        today: date | None = None,
    ) -> PreviewResult:
        """Fill a template without rendering bytes and report missing variables.

        Raises:
            TemplateNotFoundError: If the template id is unknown.
        """
        template = self.get_template(template_id)
        resolved = await self._resolve(template, task_id, variables, user_id, today)
        return PreviewResult(
            content=fill(template, resolved),
            missing_variables=missing_variables(template, resolved),
        )
