"""Supabase Storage upload over its REST API."""

import logging
from urllib.parse import quote

import httpx

from famdocs.interfaces.storage import BaseDocumentStorage, StorageError

logger = logging.getLogger(__name__)


class SupabaseDocumentStorage(BaseDocumentStorage):
    """Uploads documents to a public Supabase Storage bucket.

    Attributes:
        url: Supabase project URL.
        key: Service role key.
        bucket: Target bucket.
        prefix: Folder inside the bucket.
    """

    def __init__(
        self,
        url: str,
        key: str,
        bucket: str = "documents",
        prefix: str = "documents",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for Supabase storage")
        self.url = url.rstrip("/")
        self.key = key
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self.timeout = timeout
        self._client = client

    def object_path(self, filename: str) -> str:
        return f"{self.prefix}/{filename}" if self.prefix else filename

    def public_url(self, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{quote(path)}"

    async def upload(self, data: bytes, filename: str, content_type: str) -> str | None:
        path = self.object_path(filename)
        endpoint = f"{self.url}/storage/v1/object/{self.bucket}/{quote(path)}"
        headers = {
            "Authorization": f"Bearer {self.key}",
            "apikey": self.key,
            "Content-Type": content_type,
            "x-upsert": "false",
        }

        try:
            if self._client is not None:
                response = await self._client.post(endpoint, content=data, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(endpoint, content=data, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(f"Supabase upload failed for {path}: {e}") from e

        logger.info(f"Uploaded {path} to bucket {self.bucket}")
        return self.public_url(path)
