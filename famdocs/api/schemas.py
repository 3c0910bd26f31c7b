"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

import base64
from typing import Any

from pydantic import BaseModel, Field

from famdocs.engine.models import RenderedDocument, Template


# =============================================================================
# Template Schemas
# =============================================================================


class TemplateSummary(BaseModel):
    """Catalogue entry without its body."""

    id: str
    label: str
    category: str
    kind: str
    variables: list[str]
    task_categories: list[str]

    @classmethod
    def from_template(cls, template: Template) -> "TemplateSummary":
        return cls(
            id=template.id,
            label=template.label,
            category=template.category,
            kind=template.kind.value,
            variables=list(template.variables),
            task_categories=list(template.task_categories),
        )


class TemplateDetail(TemplateSummary):
    """Catalogue entry including its body."""

    body: str

    @classmethod
    def from_template(cls, template: Template) -> "TemplateDetail":
        summary = TemplateSummary.from_template(template)
        return cls(**summary.model_dump(), body=template.body)


class TemplateListResponse(BaseModel):
    """Response for listing templates."""

    templates: list[TemplateSummary]
    total: int


# =============================================================================
# Document Schemas
# =============================================================================


class DocumentRequest(BaseModel):
    """Request shared by generation and preview."""

    template_id: str = Field(min_length=1, description="Catalogue template id")
    task_id: str | None = Field(default=None, description="Task the document is about")
    variables: dict[str, str | None] = Field(
        default_factory=dict,
        description="Caller overrides; null is ignored, an empty string blanks the field",
    )


class GenerateResponse(BaseModel):
    """Response for document generation."""

    filename: str
    content_type: str
    content: str = Field(description="Filled text content")
    document_base64: str = Field(description="Document bytes, base64-encoded")
    document_url: str | None = Field(default=None, description="Stored document URL, if uploaded")

    @classmethod
    def from_document(cls, document: RenderedDocument) -> "GenerateResponse":
        return cls(
            filename=document.filename,
            content_type=document.content_type,
            content=document.content,
            document_base64=base64.b64encode(document.document_bytes).decode("ascii"),
            document_url=document.document_url,
        )


class PreviewResponse(BaseModel):
    """Response for document preview."""

    content: str
    missing_variables: list[str]


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")
