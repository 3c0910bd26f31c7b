"""FastAPI routers and dependencies."""

from famdocs.api.deps import get_document_service, get_user_id
from famdocs.api.documents import router as documents_router
from famdocs.api.templates import router as templates_router

__all__ = [
    "get_document_service",
    "get_user_id",
    "documents_router",
    "templates_router",
]
