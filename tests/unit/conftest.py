"""Shared fakes and fixtures for the unit tests."""

from datetime import date

import pytest

from famdocs.engine.models import Child, LayoutBlock, Profile, Task
from famdocs.engine.readers import TaskReader
from famdocs.engine.renderer import TemplateRenderer
from famdocs.engine.resolver import VariableResolver
from famdocs.engine.service import DocumentService
from famdocs.interfaces.extractor import BaseOcrClient, BaseTextExtractor
from famdocs.interfaces.fetcher import BaseAttachmentFetcher, FetchedAttachment
from famdocs.interfaces.renderer import BaseDocumentRenderer
from famdocs.interfaces.repository import BaseProfileRepository, BaseTaskRepository
from famdocs.interfaces.storage import BaseDocumentStorage

PDF_MAGIC = b"%PDF-1.4\n"


class FakeFetcher(BaseAttachmentFetcher):
    def __init__(self) -> None:
        self.data = PDF_MAGIC
        self.content_type = "application/pdf"
        self.error: Exception | None = None
        self.calls: list[str] = []

    async def fetch_bytes(self, url: str) -> FetchedAttachment:
        self.calls.append(url)
        if self.error:
            raise self.error
        return FetchedAttachment(url=url, data=self.data, content_type=self.content_type)


class FakeTextExtractor(BaseTextExtractor):
    def __init__(self) -> None:
        self.text: str | None = None
        self.calls = 0

    async def extract_text(self, data: bytes) -> str | None:
        self.calls += 1
        return self.text


class FakeOcrClient(BaseOcrClient):
    def __init__(self) -> None:
        self.text: str | None = None
        self.calls: list[str] = []

    async def ocr_text(self, url: str) -> str | None:
        self.calls.append(url)
        return self.text


class FakeDocumentRenderer(BaseDocumentRenderer):
    def __init__(self) -> None:
        self.rendered: list[tuple[str, list[LayoutBlock]]] = []

    @property
    def content_type(self) -> str:
        return "application/pdf"

    @property
    def extension(self) -> str:
        return "pdf"

    def render(self, title: str, blocks: list[LayoutBlock]) -> bytes:
        self.rendered.append((title, blocks))
        return b"%FAKE"


class FakeStorage(BaseDocumentStorage):
    def __init__(self) -> None:
        self.error: Exception | None = None
        self.uploads: list[tuple[str, str]] = []

    async def upload(self, data: bytes, filename: str, content_type: str) -> str | None:
        if self.error:
            raise self.error
        self.uploads.append((filename, content_type))
        return f"https://storage.example.com/{filename}"


class InMemoryRepository(BaseProfileRepository, BaseTaskRepository):
    def __init__(self, profile: Profile | None = None, tasks: list[Task] | None = None) -> None:
        self.profile = profile or Profile()
        self.tasks = {t.id: t for t in tasks or []}
        self.user_ids: list[str | None] = []

    async def get_profile(self, user_id: str | None = None) -> Profile:
        self.user_ids.append(user_id)
        return self.profile

    async def get_task(self, task_id: str, user_id: str | None = None) -> Task | None:
        return self.tasks.get(task_id)


@pytest.fixture
def today():
    """Fixed reference day."""
    return date(2025, 12, 1)


@pytest.fixture
def family_profile():
    """Profile with a full identity and two children."""
    return Profile(
        first_name="Marie",
        last_name="Durand",
        address="12 rue des Lilas",
        postal_code="69003",
        city="Lyon",
        children=(
            Child(id="c1", first_name="Héloïse", birth_date="2018-05-04"),
            Child(id="c2", first_name="Charles", birth_date="2020-09-12T00:00:00.000Z"),
        ),
    )


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def text_extractor():
    return FakeTextExtractor()


@pytest.fixture
def ocr_client():
    return FakeOcrClient()


@pytest.fixture
def task_reader(fetcher, text_extractor, ocr_client):
    return TaskReader(fetcher=fetcher, text_extractor=text_extractor, ocr_client=ocr_client)


@pytest.fixture
def resolver(task_reader):
    return VariableResolver(task_reader)


@pytest.fixture
def document_renderer():
    return FakeDocumentRenderer()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def repository(family_profile):
    return InMemoryRepository(profile=family_profile)


@pytest.fixture
def service(repository, resolver, document_renderer, storage):
    return DocumentService(
        profiles=repository,
        tasks=repository,
        resolver=resolver,
        renderer=TemplateRenderer(document_renderer),
        storage=storage,
    )
