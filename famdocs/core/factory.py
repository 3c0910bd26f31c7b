"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from famdocs.core.config import Settings, get_settings
from famdocs.engine.readers import TaskReader
from famdocs.engine.renderer import TemplateRenderer
from famdocs.engine.resolver import VariableResolver
from famdocs.engine.service import DocumentService
from famdocs.interfaces.cache import BaseCache
from famdocs.interfaces.extractor import BaseOcrClient, BaseTextExtractor
from famdocs.interfaces.fetcher import BaseAttachmentFetcher
from famdocs.interfaces.renderer import BaseDocumentRenderer
from famdocs.interfaces.storage import BaseDocumentStorage
from famdocs.strategies.caches import MemoryCache
from famdocs.strategies.extractors import PypdfTextExtractor
from famdocs.strategies.fetchers import HttpAttachmentFetcher
from famdocs.strategies.ocr import OcrSpaceClient
from famdocs.strategies.renderers import DocxDocumentRenderer, PdfDocumentRenderer
from famdocs.strategies.repositories import JsonFileRepository
from famdocs.strategies.storage import LocalDocumentStorage, SupabaseDocumentStorage

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        service = factory.get_document_service()
        document = await service.generate("facture_contestation", task_id="t1")
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._renderer_cache: BaseDocumentRenderer | None = None
        self._storage_cache: BaseDocumentStorage | None = None
        self._text_extractor_cache: BaseTextExtractor | None = None
        self._ocr_client_cache: BaseOcrClient | None = None
        self._fetcher_cache: BaseAttachmentFetcher | None = None
        self._cache: BaseCache | None = None
        self._repository_cache: JsonFileRepository | None = None
        self._service_cache: DocumentService | None = None

    def get_renderer(self, renderer_type: str | None = None) -> BaseDocumentRenderer:
        """Get a document renderer based on the specified type.

        Args:
            renderer_type: 'pdf' or 'docx'. If None, uses settings.

        Returns:
            A BaseDocumentRenderer implementation instance.

        Raises:
            ValueError: If the renderer type is unknown.
        """
        if self._renderer_cache is None or renderer_type is not None:
            renderer_type = renderer_type or self._settings.renderer_type

            logger.info(f"Instantiating renderer: {renderer_type}")

            match renderer_type:
                case "pdf":
                    self._renderer_cache = PdfDocumentRenderer()
                case "docx":
                    self._renderer_cache = DocxDocumentRenderer()
                case _:
                    raise ValueError(
                        f"Unknown renderer type: {renderer_type}. "
                        f"Valid options: 'pdf', 'docx'"
                    )

        return self._renderer_cache

    def get_storage(self, storage_type: str | None = None) -> BaseDocumentStorage:
        """Get a document storage based on the specified type.

        Args:
            storage_type: 'local' or 'supabase'. If None, uses settings.

        Returns:
            A BaseDocumentStorage implementation instance.

        Raises:
            ValueError: If the storage type is unknown or not configured.
        """
        if self._storage_cache is None or storage_type is not None:
            storage_type = storage_type or self._settings.storage_type

            logger.info(f"Instantiating storage: {storage_type}")

            match storage_type:
                case "local":
                    self._storage_cache = LocalDocumentStorage(root=self._settings.upload_dir)
                case "supabase":
                    self._storage_cache = SupabaseDocumentStorage(
                        url=self._settings.supabase_url,
                        key=self._settings.supabase_key,
                        bucket=self._settings.supabase_bucket,
                    )
                case _:
                    raise ValueError(
                        f"Unknown storage type: {storage_type}. "
                        f"Valid options: 'local', 'supabase'"
                    )

        return self._storage_cache

    def get_text_extractor(self) -> BaseTextExtractor:
        if self._text_extractor_cache is None:
            logger.info("Instantiating PDF text extractor")
            self._text_extractor_cache = PypdfTextExtractor(
                max_bytes=self._settings.max_attachment_bytes,
                min_length=self._settings.min_text_length,
                max_length=self._settings.max_text_length,
            )
        return self._text_extractor_cache

    def get_cache(self) -> BaseCache:
        if self._cache is None:
            self._cache = MemoryCache()
        return self._cache

    def get_ocr_client(self) -> BaseOcrClient:
        if self._ocr_client_cache is None:
            if not self._settings.ocr_enabled:
                logger.warning("OCR_SPACE_API_KEY not set: scanned attachments will not be read")
            self._ocr_client_cache = OcrSpaceClient(
                api_key=self._settings.ocr_space_api_key,
                cache=self.get_cache(),
                url=self._settings.ocr_space_url,
                language=self._settings.ocr_language,
                timeout=self._settings.ocr_timeout_seconds,
                cache_ttl=self._settings.ocr_cache_ttl_seconds,
            )
        return self._ocr_client_cache

    def get_fetcher(self) -> BaseAttachmentFetcher:
        if self._fetcher_cache is None:
            self._fetcher_cache = HttpAttachmentFetcher(
                timeout=self._settings.attachment_timeout_seconds,
                max_bytes=self._settings.max_attachment_bytes,
            )
        return self._fetcher_cache

    def get_repository(self) -> JsonFileRepository:
        if self._repository_cache is None:
            self._repository_cache = JsonFileRepository(
                data_dir=self._settings.data_dir,
                default_user_id=self._settings.default_user_id,
            )
        return self._repository_cache

    def get_document_service(self) -> DocumentService:
        """Get the document service wired with the configured strategies."""
        if self._service_cache is None:
            logger.info("Instantiating document service")
            repository = self.get_repository()
            task_reader = TaskReader(
                fetcher=self.get_fetcher(),
                text_extractor=self.get_text_extractor(),
                ocr_client=self.get_ocr_client(),
            )
            self._service_cache = DocumentService(
                profiles=repository,
                tasks=repository,
                resolver=VariableResolver(task_reader),
                renderer=TemplateRenderer(self.get_renderer()),
                storage=self.get_storage(),
            )
        return self._service_cache

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        """
        self._renderer_cache = None
        self._storage_cache = None
        self._text_extractor_cache = None
        self._ocr_client_cache = None
        self._fetcher_cache = None
        self._cache = None
        self._repository_cache = None
        self._service_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
