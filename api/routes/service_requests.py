"""Service request endpoints.

Implements:
- GET /service-requests - Filtered list for the signed-in user
- POST /service-requests - Tenant submission
- GET /service-requests/{id} - Detail/action panel
- POST /service-requests/{id}/transition - Provider action (accept, decline, complete)
- POST /service-requests/{id}/assign - Manager assigns a provider
- POST /service-requests/{id}/cancel - Manager cancels an open request
- POST /service-requests/{id}/notes - Append a note

Every mutation is applied to the in-memory store; a re-read shows the
new state.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import current_user, http_error
from api.services.store import get_store
from api.services.views import request_item, service_request_detail, service_request_list
from core.errors import PortalError
from core.formatting import humanize_status
from core.observability import with_correlation
from models.api_responses import (
    ActionResult,
    AssignRequest,
    CancelRequest,
    NoteRequest,
    RequestListResponse,
    ServiceRequestCreate,
    ServiceRequestDetailResponse,
    TransitionRequest,
)


router = APIRouter()


def _result(user, before, after, message: str) -> ActionResult:
    return ActionResult(
        success=True,
        message=message,
        previous_status=before,
        service_request=request_item(after, get_store(), viewer=user),
    )


@router.get(
    "",
    response_model=RequestListResponse,
    summary="List Service Requests",
    description="Requests visible to the signed-in user, newest first.",
)
async def list_service_requests(
    search: Optional[str] = Query(None, description="Matches title or description"),
    status: Optional[str] = Query(None, description="Status filter, or 'all'"),
    priority: Optional[str] = Query(None, description="Priority filter, or 'all'"),
    user=Depends(current_user),
) -> RequestListResponse:
    try:
        return service_request_list(user, search=search, status=status, priority=priority)
    except PortalError as exc:
        raise http_error(exc) from exc


@router.post(
    "",
    response_model=ServiceRequestDetailResponse,
    status_code=201,
    summary="Submit Service Request",
    description="Tenant submits a new request against their property.",
)
async def submit_service_request(
    body: ServiceRequestCreate,
    user=Depends(current_user),
) -> ServiceRequestDetailResponse:
    store = get_store()
    try:
        request = store.submit_service_request(
            user,
            title=body.title,
            description=body.description,
            category=body.category,
            priority=body.priority,
            images=body.images,
        )
        return service_request_detail(user, request.id, store)
    except PortalError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{request_id}",
    response_model=ServiceRequestDetailResponse,
    summary="Get Service Request",
    description="Detail with resolved property, tenant, provider and permitted actions.",
)
async def get_service_request(
    request_id: str = Path(..., description="Service request identifier"),
    user=Depends(current_user),
) -> ServiceRequestDetailResponse:
    try:
        return service_request_detail(user, request_id)
    except PortalError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{request_id}/transition",
    response_model=ActionResult,
    summary="Apply Provider Action",
    description="Move an assigned request along the lifecycle (accept, decline, complete).",
)
async def transition_service_request(
    body: TransitionRequest,
    request_id: str = Path(..., description="Service request identifier"),
    user=Depends(current_user),
) -> ActionResult:
    store = get_store()
    with with_correlation(service_request_id=request_id):
        try:
            before = store.get_service_request(request_id).status
            updated = store.transition(
                user,
                request_id,
                body.target_status,
                note=body.note,
                actual_cost=body.actual_cost,
            )
        except PortalError as exc:
            raise http_error(exc) from exc

    return _result(user, before, updated, f"Status updated to {humanize_status(updated.status)}")


@router.post(
    "/{request_id}/assign",
    response_model=ActionResult,
    summary="Assign Provider",
    description="Manager assigns a pending request to a service provider.",
)
async def assign_service_request(
    body: AssignRequest,
    request_id: str = Path(..., description="Service request identifier"),
    user=Depends(current_user),
) -> ActionResult:
    store = get_store()
    with with_correlation(service_request_id=request_id):
        try:
            before = store.get_service_request(request_id).status
            updated = store.assign(
                user,
                request_id,
                body.provider_id,
                estimated_cost=body.estimated_cost,
            )
            provider = store.get_user(body.provider_id)
        except PortalError as exc:
            raise http_error(exc) from exc

    return _result(user, before, updated, f"Assigned to {provider.company_name}")


@router.post(
    "/{request_id}/cancel",
    response_model=ActionResult,
    summary="Cancel Service Request",
    description="Manager cancels a pending, assigned or in-progress request.",
)
async def cancel_service_request(
    request_id: str = Path(..., description="Service request identifier"),
    body: Optional[CancelRequest] = None,
    user=Depends(current_user),
) -> ActionResult:
    store = get_store()
    with with_correlation(service_request_id=request_id):
        try:
            before = store.get_service_request(request_id).status
            updated = store.cancel(user, request_id, note=body.note if body else None)
        except PortalError as exc:
            raise http_error(exc) from exc

    return _result(user, before, updated, "Service request cancelled")


@router.post(
    "/{request_id}/notes",
    response_model=ServiceRequestDetailResponse,
    summary="Add Note",
    description="Append a note to a request the user can view.",
)
async def add_note(
    body: NoteRequest,
    request_id: str = Path(..., description="Service request identifier"),
    user=Depends(current_user),
) -> ServiceRequestDetailResponse:
    store = get_store()
    try:
        store.add_note(user, request_id, body.note)
        return service_request_detail(user, request_id, store)
    except PortalError as exc:
        raise http_error(exc) from exc
