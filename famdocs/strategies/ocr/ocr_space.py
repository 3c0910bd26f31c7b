"""OCR.space client.

Reads a remote image or PDF by URL. Results are cached per URL, failures
included, so that a document is sent to the service at most once per TTL.
"""

import logging

import httpx

from famdocs.interfaces.cache import MISSING, BaseCache
from famdocs.interfaces.extractor import BaseOcrClient

logger = logging.getLogger(__name__)


class OcrSpaceClient(BaseOcrClient):
    """OCR strategy backed by the OCR.space ``parse/imageurl`` endpoint.

    Attributes:
        api_key: OCR.space API key. Without it every call returns None.
        cache: Shared result cache.
        url: Endpoint URL.
        language: OCR.space language code ("fre" for French).
        timeout: Request timeout in seconds.
        cache_ttl: Lifetime of cached results in seconds.
    """

    def __init__(
        self,
        api_key: str,
        cache: BaseCache,
        url: str = "https://api.ocr.space/parse/imageurl",
        language: str = "fre",
        timeout: float = 12.0,
        cache_ttl: float = 1800.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.cache = cache
        self.url = url
        self.language = language
        self.timeout = timeout
        self.cache_ttl = cache_ttl
        self._client = client

    async def ocr_text(self, url: str) -> str | None:
        if not self.api_key:
            logger.debug("OCR.space API key not configured, skipping OCR")
            return None

        cache_key = f"ocr:{url}"
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            logger.debug(f"OCR cache hit for {url}")
            return cached

        text = await self._request(url)
        self.cache.put(cache_key, text, self.cache_ttl)
        return text

    async def _request(self, url: str) -> str | None:
        form = {
            "apikey": self.api_key,
            "url": url,
            "language": self.language,
            "isOverlayRequired": "false",
            "OCREngine": "2",
        }

        try:
            if self._client is not None:
                response = await self._client.post(self.url, data=form, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.url, data=form)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"OCR.space request failed for {url}: {e}")
            return None

        if payload.get("IsErroredOnProcessing"):
            logger.warning(f"OCR.space could not process {url}: {payload.get('ErrorMessage')}")
            return None

        parsed = payload.get("ParsedResults") or []
        text = "\n".join((r.get("ParsedText") or "") for r in parsed).strip()
        if not text:
            return None

        logger.info(f"OCR.space returned {len(text)} chars for {url}")
        return text
