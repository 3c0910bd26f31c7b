"""Template catalogue API routes."""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from famdocs.api.schemas import TemplateDetail, TemplateListResponse, TemplateSummary
from famdocs.engine import catalogue

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    category: str | None = Query(default=None, description="Template category filter"),
    task_category: str | None = Query(default=None, description="Suggest templates for a task category"),
) -> TemplateListResponse:
    """List catalogue templates.

    Args:
        category: Only templates of this category.
        task_category: Only templates suggested for this task category.

    Returns:
        TemplateListResponse with template summaries.
    """
    if task_category:
        templates = catalogue.get_templates_for_task_category(task_category)
        if category:
            templates = [t for t in templates if t.category == category]
    elif category:
        templates = catalogue.get_templates_by_category(category)
    else:
        templates = catalogue.get_all_templates()

    return TemplateListResponse(
        templates=[TemplateSummary.from_template(t) for t in templates],
        total=len(templates),
    )


@router.get("/{template_id}", response_model=TemplateDetail)
async def get_template(template_id: str) -> TemplateDetail:
    """Get one template, including its body.

    Raises:
        HTTPException: If the template does not exist.
    """
    template = catalogue.get_template(template_id)
    if template is None:
        logger.warning(f"Template not found: {template_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template not found: {template_id}",
        )
    return TemplateDetail.from_template(template)
