"""Unit tests for the concrete strategies."""

import asyncio
import io
import json
from urllib.parse import parse_qs

import httpx
import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from famdocs.interfaces.cache import MISSING
from famdocs.interfaces.fetcher import AttachmentFetchError
from famdocs.interfaces.storage import StorageError
from famdocs.strategies.caches import MemoryCache
from famdocs.strategies.extractors import PypdfTextExtractor
from famdocs.strategies.fetchers import HttpAttachmentFetcher
from famdocs.strategies.ocr import OcrSpaceClient
from famdocs.strategies.repositories import JsonFileRepository, normalize_user_id, snake_keys
from famdocs.strategies.storage import LocalDocumentStorage, SupabaseDocumentStorage


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def make_pdf(*lines: str) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    y = 800
    for line in lines:
        pdf.drawString(72, y, line)
        y -= 20
    pdf.save()
    return buffer.getvalue()


# =============================================================================
# Cache Tests
# =============================================================================


class TestMemoryCache:
    """Test suite for MemoryCache."""

    def test_get_and_expiry(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        cache.put("k", "v", ttl=10)

        assert cache.get("k") == "v"
        clock.now += 10
        assert cache.get("k") is MISSING
        assert len(cache) == 0

    def test_none_is_a_cached_value(self):
        cache = MemoryCache()
        cache.put("k", None, ttl=60)
        assert cache.get("k") is None
        assert cache.get("other") is MISSING

    def test_eviction_prefers_expired_entries(self):
        clock = FakeClock()
        cache = MemoryCache(max_entries=2, clock=clock)
        cache.put("short", 1, ttl=1)
        cache.put("long", 2, ttl=100)
        clock.now += 5
        cache.put("new", 3, ttl=100)

        assert cache.get("long") == 2
        assert cache.get("new") == 3
        assert len(cache) == 2

    def test_eviction_drops_oldest(self):
        cache = MemoryCache(max_entries=2)
        cache.put("a", 1, ttl=100)
        cache.put("b", 2, ttl=100)
        cache.put("c", 3, ttl=100)

        assert cache.get("a") is MISSING
        assert cache.get("c") == 3


# =============================================================================
# Extractor Tests
# =============================================================================


class TestPypdfTextExtractor:
    """Test suite for PypdfTextExtractor."""

    def test_text_layer(self):
        data = make_pdf("Facture n° CE25/3924", "Total TTC : 120,50 EUR")

        async def run_test():
            text = await PypdfTextExtractor().extract_text(data)
            assert "CE25/3924" in text

        asyncio.run(run_test())

    def test_empty_text_layer_is_none(self):
        data = make_pdf()

        async def run_test():
            assert await PypdfTextExtractor().extract_text(data) is None

        asyncio.run(run_test())

    def test_truncates_long_text(self):
        data = make_pdf("Facture n° CE25/3924 " * 3)

        async def run_test():
            text = await PypdfTextExtractor(max_length=20).extract_text(data)
            assert len(text) == 20

        asyncio.run(run_test())

    def test_refuses_oversized_payload(self):
        async def run_test():
            with pytest.raises(ValueError):
                await PypdfTextExtractor(max_bytes=10).extract_text(b"%PDF-" + b"0" * 20)

        asyncio.run(run_test())


# =============================================================================
# OCR Tests
# =============================================================================


class TestOcrSpaceClient:
    """Test suite for OcrSpaceClient."""

    URL = "https://files.example.com/scan.jpg"

    @staticmethod
    def make_client(handler, cache=None, api_key="key123"):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return OcrSpaceClient(api_key=api_key, cache=cache or MemoryCache(), client=http)

    def test_unconfigured_returns_none(self):
        def handler(request):
            raise AssertionError("no request expected")

        async def run_test():
            client = self.make_client(handler, api_key="")
            assert await client.ocr_text(self.URL) is None

        asyncio.run(run_test())

    def test_success_and_cache_hit(self):
        requests = []

        def handler(request):
            requests.append(parse_qs(request.content.decode()))
            return httpx.Response(
                200,
                json={
                    "IsErroredOnProcessing": False,
                    "ParsedResults": [{"ParsedText": "Facture n° CE25/3924\n"}],
                },
            )

        async def run_test():
            client = self.make_client(handler)
            assert await client.ocr_text(self.URL) == "Facture n° CE25/3924"
            assert await client.ocr_text(self.URL) == "Facture n° CE25/3924"

            assert len(requests) == 1
            form = requests[0]
            assert form["apikey"] == ["key123"]
            assert form["url"] == [self.URL]
            assert form["language"] == ["fre"]
            assert form["OCREngine"] == ["2"]

        asyncio.run(run_test())

    def test_failure_is_cached(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        async def run_test():
            client = self.make_client(handler)
            assert await client.ocr_text(self.URL) is None
            assert await client.ocr_text(self.URL) is None
            assert len(calls) == 1

        asyncio.run(run_test())

    def test_processing_error(self):
        def handler(request):
            return httpx.Response(
                200, json={"IsErroredOnProcessing": True, "ErrorMessage": ["Timed out"]}
            )

        async def run_test():
            assert await self.make_client(handler).ocr_text(self.URL) is None

        asyncio.run(run_test())


# =============================================================================
# Fetcher Tests
# =============================================================================


class TestHttpAttachmentFetcher:
    """Test suite for HttpAttachmentFetcher."""

    @staticmethod
    def make_fetcher(handler, max_bytes=1024):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpAttachmentFetcher(max_bytes=max_bytes, client=http)

    def test_pdf_download(self):
        def handler(request):
            return httpx.Response(
                200, content=b"%PDF-1.4 data", headers={"Content-Type": "Application/PDF; charset=binary"}
            )

        async def run_test():
            fetched = await self.make_fetcher(handler).fetch_bytes("https://files.example.com/f.pdf")
            assert fetched.content_type == "application/pdf"
            assert fetched.is_pdf

        asyncio.run(run_test())

    def test_pdf_detected_by_magic_bytes(self):
        def handler(request):
            return httpx.Response(200, content=b"%PDF-1.7")

        async def run_test():
            fetched = await self.make_fetcher(handler).fetch_bytes("https://files.example.com/f")
            assert fetched.content_type == ""
            assert fetched.is_pdf

        asyncio.run(run_test())

    def test_http_error(self):
        def handler(request):
            return httpx.Response(404)

        async def run_test():
            with pytest.raises(AttachmentFetchError):
                await self.make_fetcher(handler).fetch_bytes("https://files.example.com/gone.pdf")

        asyncio.run(run_test())

    def test_oversized(self):
        def handler(request):
            return httpx.Response(200, content=b"x" * 2048)

        async def run_test():
            with pytest.raises(AttachmentFetchError, match="too large"):
                await self.make_fetcher(handler).fetch_bytes("https://files.example.com/big.pdf")

        asyncio.run(run_test())

    def test_oversized_stream_stops_early(self):
        sent = []

        async def body():
            for _ in range(100):
                sent.append(512)
                yield b"x" * 512

        def handler(request):
            return httpx.Response(200, content=body())

        async def run_test():
            with pytest.raises(AttachmentFetchError, match="too large"):
                await self.make_fetcher(handler).fetch_bytes("https://files.example.com/big.pdf")
            assert len(sent) < 10

        asyncio.run(run_test())

    def test_streamed_body_within_limit(self):
        async def body():
            for part in (b"%PDF-", b"1.7"):
                yield part

        def handler(request):
            return httpx.Response(200, content=body(), headers={"Content-Type": "application/pdf"})

        async def run_test():
            fetched = await self.make_fetcher(handler).fetch_bytes("https://files.example.com/f.pdf")
            assert fetched.data == b"%PDF-1.7"
            assert fetched.is_pdf

        asyncio.run(run_test())


# =============================================================================
# Storage Tests
# =============================================================================


class TestLocalDocumentStorage:
    """Test suite for LocalDocumentStorage."""

    def test_writes_file(self, tmp_path):
        storage = LocalDocumentStorage(tmp_path / "out")

        async def run_test():
            location = await storage.upload(b"%FAKE", "lettre_1.pdf", "application/pdf")
            assert (tmp_path / "out" / "lettre_1.pdf").read_bytes() == b"%FAKE"
            assert location == str(tmp_path / "out" / "lettre_1.pdf")

        asyncio.run(run_test())

    def test_filename_cannot_escape_root(self, tmp_path):
        storage = LocalDocumentStorage(tmp_path / "out")

        async def run_test():
            await storage.upload(b"%FAKE", "../evil.pdf", "application/pdf")
            assert (tmp_path / "out" / "evil.pdf").exists()
            assert not (tmp_path / "evil.pdf").exists()

        asyncio.run(run_test())


class TestSupabaseDocumentStorage:
    """Test suite for SupabaseDocumentStorage."""

    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            SupabaseDocumentStorage(url="", key="")

    def test_upload(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"Key": "documents/documents/lettre_1.pdf"})

        async def run_test():
            http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            storage = SupabaseDocumentStorage(
                url="https://proj.supabase.co/", key="secret", client=http
            )
            url = await storage.upload(b"%FAKE", "lettre_1.pdf", "application/pdf")

            assert url == "https://proj.supabase.co/storage/v1/object/public/documents/documents/lettre_1.pdf"
            request = seen[0]
            assert request.method == "POST"
            assert request.url.path == "/storage/v1/object/documents/documents/lettre_1.pdf"
            assert request.headers["Authorization"] == "Bearer secret"
            assert request.headers["Content-Type"] == "application/pdf"
            assert request.content == b"%FAKE"

        asyncio.run(run_test())

    def test_upload_failure(self):
        def handler(request):
            return httpx.Response(403, json={"error": "Unauthorized"})

        async def run_test():
            http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            storage = SupabaseDocumentStorage(url="https://proj.supabase.co", key="secret", client=http)
            with pytest.raises(StorageError):
                await storage.upload(b"%FAKE", "lettre_1.pdf", "application/pdf")

        asyncio.run(run_test())


# =============================================================================
# Repository Tests
# =============================================================================


class TestJsonFileRepository:
    """Test suite for JsonFileRepository."""

    @pytest.fixture
    def repository(self, tmp_path):
        user_dir = tmp_path / "users" / "uid_abc123"
        user_dir.mkdir(parents=True)
        (user_dir / "profile.json").write_text(
            json.dumps(
                {
                    "firstName": "Marie",
                    "lastName": "Durand",
                    "postalCode": "69003",
                    "children": [{"id": "c1", "firstName": "Héloïse", "birthDate": "2018-05-04"}],
                }
            ),
            encoding="utf-8",
        )
        (user_dir / "tasks.json").write_text(
            json.dumps(
                {
                    "tasks": [
                        {"id": "t1", "title": "Payer facture", "deadline": "2025-12-15T00:00:00Z"},
                        {"id": "t2", "title": "Absence école", "attachmentUrl": "https://f/x.pdf"},
                        {"id": "t3", "title": "Facture Orange", "imageUrl": "https://f/scan.png"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        return JsonFileRepository(tmp_path)

    def test_profile(self, repository):
        async def run_test():
            profile = await repository.get_profile("UID_ABC123")
            assert profile.full_name == "Marie Durand"
            assert profile.postal_code == "69003"
            assert profile.children[0].first_name == "Héloïse"

        asyncio.run(run_test())

    def test_unknown_user_gets_empty_profile(self, repository):
        async def run_test():
            profile = await repository.get_profile("uid_nobody")
            assert profile.full_name == ""

        asyncio.run(run_test())

    def test_task_lookup(self, repository):
        async def run_test():
            task = await repository.get_task("t2", "uid_abc123")
            assert task.attachment_url == "https://f/x.pdf"
            assert await repository.get_task("t9", "uid_abc123") is None

        asyncio.run(run_test())

    def test_legacy_image_url_is_the_attachment(self, repository):
        async def run_test():
            task = await repository.get_task("t3", "uid_abc123")
            assert task.attachment_url == "https://f/scan.png"

        asyncio.run(run_test())

    def test_unparseable_file(self, repository, tmp_path):
        (tmp_path / "users" / "uid_abc123" / "tasks.json").write_text("{not json", encoding="utf-8")

        async def run_test():
            assert await repository.get_task("t1", "uid_abc123") is None

        asyncio.run(run_test())

    def test_invalid_user_id_uses_default(self, repository, tmp_path):
        assert repository.user_dir("../etc") == tmp_path / "users" / "uid_default"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("uid_ABC123", "uid_abc123"),
        ("  uid_x1 ", "uid_x1"),
        ("uid_", None),
        ("user_1", None),
        ("uid_a/b", None),
        (None, None),
        (42, None),
    ],
)
def test_normalize_user_id(raw, expected):
    assert normalize_user_id(raw) == expected


def test_snake_keys_is_recursive():
    data = {"firstName": "A", "children": [{"birthDate": "2018-05-04"}]}
    assert snake_keys(data) == {"first_name": "A", "children": [{"birth_date": "2018-05-04"}]}
