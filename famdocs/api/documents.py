"""Document generation API routes.

The routes only translate requests and engine errors; all document logic
lives in the engine.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from famdocs.api.deps import get_document_service, get_user_id
from famdocs.api.schemas import DocumentRequest, GenerateResponse, PreviewResponse
from famdocs.engine.service import DocumentService, TemplateNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/generate", response_model=GenerateResponse, status_code=status.HTTP_200_OK)
async def generate_document(
    request: DocumentRequest,
    user_id: str = Depends(get_user_id),
    service: DocumentService = Depends(get_document_service),
) -> GenerateResponse:
    """Generate a filled document from a template.

    Args:
        request: Template id, optional task id and variable overrides.
        user_id: User ID from X-User-ID header.
        service: The document service.

    Returns:
        GenerateResponse with the base64 document and its stored URL.

    Raises:
        HTTPException: If the template does not exist.
    """
    logger.info(f"Generating {request.template_id} for user {user_id} (task={request.task_id})")
    try:
        document = await service.generate(
            request.template_id,
            task_id=request.task_id,
            variables=request.variables,
            user_id=user_id,
        )
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return GenerateResponse.from_document(document)


@router.post("/preview", response_model=PreviewResponse)
async def preview_document(
    request: DocumentRequest,
    user_id: str = Depends(get_user_id),
    service: DocumentService = Depends(get_document_service),
) -> PreviewResponse:
    """Fill a template without rendering and list its missing variables.

    Raises:
        HTTPException: If the template does not exist.
    """
    try:
        preview = await service.preview(
            request.template_id,
            task_id=request.task_id,
            variables=request.variables,
            user_id=user_id,
        )
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return PreviewResponse(content=preview.content, missing_variables=preview.missing_variables)
