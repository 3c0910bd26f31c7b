"""Per-user JSON file store for profiles and tasks.

Layout::

    <data_dir>/users/<user_id>/profile.json
    <data_dir>/users/<user_id>/tasks.json

Files are written by the rest of the application in camelCase; keys are
mapped to the engine's field names on read.
"""

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from famdocs.engine.models import Profile, Task
from famdocs.interfaces.repository import BaseProfileRepository, BaseTaskRepository

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "uid_default"

_USER_ID = re.compile(r"uid_[a-z0-9]+", re.IGNORECASE)
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def normalize_user_id(raw: object) -> str | None:
    """Lowercased user id when it is a safe ``uid_*`` token, else None."""
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    if not _USER_ID.fullmatch(trimmed):
        return None
    return trimmed.lower()


def snake_keys(value: Any) -> Any:
    """Recursively convert camelCase dictionary keys to snake_case."""
    if isinstance(value, dict):
        return {_CAMEL_BOUNDARY.sub(r"_\1", k).lower(): snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [snake_keys(v) for v in value]
    return value


class JsonFileRepository(BaseProfileRepository, BaseTaskRepository):
    """Reads profiles and tasks from the per-user JSON layout.

    Args:
        data_dir: Root data directory.
        default_user_id: User used when no valid id is given.
    """

    def __init__(self, data_dir: Path, default_user_id: str = DEFAULT_USER_ID) -> None:
        self.data_dir = Path(data_dir)
        self.default_user_id = default_user_id

    def user_dir(self, user_id: str | None) -> Path:
        uid = normalize_user_id(user_id) or self.default_user_id
        return self.data_dir / "users" / uid

    async def _load(self, user_id: str | None, filename: str) -> Any:
        path = self.user_dir(user_id) / filename
        if not path.exists():
            return None
        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
            return json.loads(raw)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Cannot read {path}: {e}")
            return None

    async def get_profile(self, user_id: str | None = None) -> Profile:
        data = await self._load(user_id, "profile.json")
        if not isinstance(data, dict):
            return Profile()
        try:
            return Profile.model_validate(snake_keys(data))
        except ValidationError as e:
            logger.warning(f"Invalid profile for user {user_id}: {e}")
            return Profile()

    async def get_task(self, task_id: str, user_id: str | None = None) -> Task | None:
        data = await self._load(user_id, "tasks.json")
        if isinstance(data, dict):
            data = data.get("tasks")
        if not isinstance(data, list):
            return None

        for entry in data:
            if not isinstance(entry, dict) or str(entry.get("id")) != task_id:
                continue
            try:
                return Task.model_validate(snake_keys(entry))
            except ValidationError as e:
                logger.warning(f"Invalid task {task_id} for user {user_id}: {e}")
                return None

        return None
