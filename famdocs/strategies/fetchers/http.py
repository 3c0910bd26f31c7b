"""Attachment download over HTTP(S) with httpx."""

import logging

import httpx

from famdocs.interfaces.fetcher import AttachmentFetchError, BaseAttachmentFetcher, FetchedAttachment

logger = logging.getLogger(__name__)


class HttpAttachmentFetcher(BaseAttachmentFetcher):
    """Downloads attachments with a bounded size and timeout.

    The body is streamed and the download stops as soon as it grows past
    ``max_bytes``.

    Attributes:
        timeout: Request timeout in seconds.
        max_bytes: Larger bodies are rejected.
    """

    def __init__(
        self,
        timeout: float = 15.0,
        max_bytes: int = 10 * 1024 * 1024,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = timeout
        self.max_bytes = max_bytes
        self._client = client

    async def fetch_bytes(self, url: str) -> FetchedAttachment:
        logger.info(f"Fetching attachment: {url}")
        try:
            if self._client is not None:
                data, content_type = await self._download(self._client, url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                    data, content_type = await self._download(client, url)
        except httpx.HTTPError as e:
            raise AttachmentFetchError(f"Download failed for {url}: {e}") from e

        return FetchedAttachment(url=url, data=data, content_type=content_type)

    async def _download(self, client: httpx.AsyncClient, url: str) -> tuple[bytes, str]:
        async with client.stream("GET", url, timeout=self.timeout, follow_redirects=True) as response:
            response.raise_for_status()

            declared = response.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > self.max_bytes:
                raise AttachmentFetchError(
                    f"Attachment too large: {declared} bytes declared (max {self.max_bytes})"
                )

            body = bytearray()
            async for chunk in response.aiter_bytes():
                body.extend(chunk)
                if len(body) > self.max_bytes:
                    raise AttachmentFetchError(
                        f"Attachment too large: more than {self.max_bytes} bytes"
                    )

            content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        return bytes(body), content_type
