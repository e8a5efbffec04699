"""Document endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import current_user, http_error
from api.services.views import document_list
from core.errors import PortalError
from models.api_responses import DocumentListResponse


router = APIRouter()


@router.get(
    "",
    response_model=DocumentListResponse,
    summary="List Documents",
    description="Tenants see their own documents; managers see all of them.",
)
async def list_documents(
    search: Optional[str] = Query(None, description="Matches name or tags"),
    type: Optional[str] = Query(None, description="Document type, or 'all'"),
    user=Depends(current_user),
) -> DocumentListResponse:
    try:
        return document_list(user, search=search, type=type)
    except PortalError as exc:
        raise http_error(exc) from exc
