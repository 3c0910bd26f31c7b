"""Local filesystem storage for generated documents."""

import asyncio
import logging
from pathlib import Path

from famdocs.interfaces.storage import BaseDocumentStorage, StorageError

logger = logging.getLogger(__name__)


class LocalDocumentStorage(BaseDocumentStorage):
    """Writes documents under a directory and returns their path."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    async def upload(self, data: bytes, filename: str, content_type: str) -> str | None:
        target = self.root / Path(filename).name
        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as e:
            raise StorageError(f"Cannot write {target}: {e}") from e
        logger.info(f"Stored {filename} ({content_type}) at {target}")
        return str(target)

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
