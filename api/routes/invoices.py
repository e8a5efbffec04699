"""Invoice endpoints (service providers)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import current_user, http_error
from api.services.views import invoice_list
from core.errors import PortalError
from models.api_responses import InvoiceListResponse


router = APIRouter()


@router.get(
    "",
    response_model=InvoiceListResponse,
    summary="List Invoices",
    description="One invoice per completed work order, with paid, pending and overdue totals.",
)
async def list_invoices(
    search: Optional[str] = Query(None, description="Matches title or invoice number"),
    status: Optional[str] = Query(None, description="paid, pending, overdue or 'all'"),
    user=Depends(current_user),
) -> InvoiceListResponse:
    try:
        return invoice_list(user, search=search, status=status)
    except PortalError as exc:
        raise http_error(exc) from exc
