"""
Personal Logger — Template Route Handler
=========================================

What:  GET /api/templates, the quick-entry phrases for each entry type.
Who:   Loaded once by the capture modal.
"""

from fastapi import APIRouter, Response

from personal_logger.schemas.entry import TemplateListResponse
from personal_logger.services.templates import all_templates

router = APIRouter(prefix="/api", tags=["Templates"])


@router.get(
    "/templates",
    response_model=TemplateListResponse,
    summary="Quick-entry templates per entry type",
)
async def list_templates(response: Response) -> TemplateListResponse:
    # Fixed for the lifetime of a release
    response.headers["Cache-Control"] = "public, max-age=3600"
    return TemplateListResponse(templates=all_templates())
