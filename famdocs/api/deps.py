"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- User scoping from the X-User-ID header
- The document service
"""

import logging

from fastapi import Depends, Header, Request

from famdocs.core.config import Settings, get_settings
from famdocs.core.factory import ComponentFactory, get_factory
from famdocs.engine.service import DocumentService
from famdocs.strategies.repositories import normalize_user_id

logger = logging.getLogger(__name__)


async def get_user_id(
    x_user_id: str | None = Header(default=None, description="User ID (uid_...)"),
    settings: Settings = Depends(get_settings),
) -> str:
    """Dependency for extracting the user ID from headers.

    Invalid or missing ids fall back to the default user.

    Args:
        x_user_id: The user ID from X-User-ID header.
        settings: Application settings.

    Returns:
        The normalized user ID.
    """
    user_id = normalize_user_id(x_user_id)
    if user_id is None:
        if x_user_id:
            logger.warning(f"Invalid X-User-ID header: {x_user_id!r}, using default user")
        return settings.default_user_id
    return user_id


def get_document_service(request: Request) -> DocumentService:
    """Dependency providing the document service of the running app."""
    factory: ComponentFactory = getattr(request.app.state, "factory", None) or get_factory()
    return factory.get_document_service()
