"""Property endpoints (property managers)."""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import current_user, http_error
from api.services.views import property_detail, property_list
from core.errors import PortalError
from models.api_responses import PropertyDetailResponse, PropertyListResponse


router = APIRouter()


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List Properties",
)
async def list_properties(
    search: Optional[str] = Query(None, description="Matches name or address"),
    status: Optional[str] = Query(None, description="occupied, vacant, maintenance or 'all'"),
    user=Depends(current_user),
) -> PropertyListResponse:
    try:
        return property_list(user, search=search, status=status)
    except PortalError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    summary="Get Property",
    description="Overview cards, current tenant, service requests and documents for one property.",
)
async def get_property(
    property_id: str = Path(..., description="Property identifier"),
    user=Depends(current_user),
) -> PropertyDetailResponse:
    try:
        return property_detail(user, property_id)
    except PortalError as exc:
        raise http_error(exc) from exc
