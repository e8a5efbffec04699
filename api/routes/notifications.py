"""Notification endpoints.

Implements:
- GET /notifications - Newest first, optional type / unread-only filters
- POST /notifications/read-all - Mark every notification read
- POST /notifications/{id}/read - Mark one read
- DELETE /notifications/{id} - Delete one
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import current_user, http_error
from api.services.store import get_store
from api.services.views import notification_list, notification_item
from core.errors import PortalError
from models.api_responses import (
    OperationResult,
    MarkAllReadResult,
    NotificationItem,
    NotificationListResponse,
)


router = APIRouter()


@router.get("", response_model=NotificationListResponse, summary="List Notifications")
async def list_notifications(
    type: Optional[str] = Query(None, description="Notification type, or 'all'"),
    unread_only: bool = Query(False, description="Only unread notifications"),
    user=Depends(current_user),
) -> NotificationListResponse:
    try:
        return notification_list(user, type=type, unread_only=unread_only)
    except PortalError as exc:
        raise http_error(exc) from exc


@router.post("/read-all", response_model=MarkAllReadResult, summary="Mark All Read")
async def mark_all_read(user=Depends(current_user)) -> MarkAllReadResult:
    store = get_store()
    updated = store.mark_all_notifications_read(user)
    unread = sum(1 for n in store.list_notifications(user.id) if not n.is_read)
    return MarkAllReadResult(updated=updated, unread_count=unread)


@router.post("/{notification_id}/read", response_model=NotificationItem, summary="Mark Read")
async def mark_read(
    notification_id: str = Path(..., description="Notification identifier"),
    user=Depends(current_user),
) -> NotificationItem:
    store = get_store()
    try:
        notification = store.mark_notification_read(user, notification_id)
    except PortalError as exc:
        raise http_error(exc) from exc
    return notification_item(notification, store.now())


@router.delete("/{notification_id}", response_model=OperationResult, summary="Delete Notification")
async def delete_notification(
    notification_id: str = Path(..., description="Notification identifier"),
    user=Depends(current_user),
) -> OperationResult:
    try:
        get_store().delete_notification(user, notification_id)
    except PortalError as exc:
        raise http_error(exc) from exc
    return OperationResult(success=True, message="Notification deleted")
