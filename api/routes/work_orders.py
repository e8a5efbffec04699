"""Work order endpoints (service providers)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import current_user, http_error
from api.services.views import work_order_list
from core.errors import PortalError
from models.api_responses import RequestListResponse


router = APIRouter()


@router.get(
    "",
    response_model=RequestListResponse,
    summary="List Work Orders",
    description="Requests assigned to the signed-in provider, each with its permitted actions.",
)
async def list_work_orders(
    search: Optional[str] = Query(None, description="Matches title or description"),
    status: Optional[str] = Query(None, description="Status filter, or 'all'"),
    user=Depends(current_user),
) -> RequestListResponse:
    try:
        return work_order_list(user, search=search, status=status)
    except PortalError as exc:
        raise http_error(exc) from exc
