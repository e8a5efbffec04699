"""Tenant endpoints (property managers)."""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import current_user, http_error
from api.services.views import tenant_detail, tenant_list
from core.errors import PortalError
from models.api_responses import TenantDetailResponse, TenantListResponse


router = APIRouter()


@router.get(
    "",
    response_model=TenantListResponse,
    summary="List Tenants",
    description="Tenants with lease status (active, expiring soon, expired).",
)
async def list_tenants(
    search: Optional[str] = Query(None, description="Matches name or e-mail"),
    user=Depends(current_user),
) -> TenantListResponse:
    try:
        return tenant_list(user, search=search)
    except PortalError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{tenant_id}",
    response_model=TenantDetailResponse,
    summary="Get Tenant",
)
async def get_tenant(
    tenant_id: str = Path(..., description="Tenant user identifier"),
    user=Depends(current_user),
) -> TenantDetailResponse:
    try:
        return tenant_detail(user, tenant_id)
    except PortalError as exc:
        raise http_error(exc) from exc
