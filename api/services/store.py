"""
In-memory Portal Store.

Backing storage for the API, seeded from ``mock_data``. Service-request
transitions requested through the API are applied here, so a re-read sees
the new status. State lives for the process lifetime only.

Usage:
    from api.services.store import get_store

    store = get_store()
    request = store.transition(provider, "1", ServiceRequestStatus.IN_PROGRESS)
"""

from datetime import datetime
from decimal import Decimal
from threading import RLock
from typing import Callable, Dict, List, Optional

from api.services import mock_data
from core.errors import AccessDeniedError, InvalidTransitionError, NotFoundError, ValidationError
from core.formatting import utcnow
from core.observability import get_logger, get_metrics, with_correlation
from lifecycle import (
    add_note,
    apply_transition,
    assign_provider,
    ensure_can_view,
    ensure_manager,
    ensure_provider_action,
    ensure_tenant,
    is_open,
)
from models.domain import (
    AnalyticsData,
    Document,
    Notification,
    NotificationType,
    Property,
    PropertyManager,
    ServiceCategory,
    ServiceProvider,
    ServiceRequest,
    ServiceRequestPriority,
    ServiceRequestStatus,
    Tenant,
    UserRole,
)

logger = get_logger(__name__)


def _highest_id(existing) -> int:
    return max((int(k) for k in existing if str(k).isdigit()), default=0)


class PortalStore:
    """Thread-safe in-memory store for every portal entity."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._lock = RLock()
        self._clock = clock
        self.reset()

    def now(self) -> datetime:
        return self._clock()

    def reset(self):
        """Reload every collection from the fixtures."""
        with self._lock:
            self._users = {u.id: u for u in mock_data.load_users()}
            self._properties: Dict[str, Property] = {p.id: p for p in mock_data.load_properties()}
            self._requests: Dict[str, ServiceRequest] = {
                r.id: r for r in mock_data.load_service_requests()
            }
            self._documents: Dict[str, Document] = {d.id: d for d in mock_data.load_documents()}
            self._notifications: Dict[str, Notification] = {
                n.id: n for n in mock_data.load_notifications()
            }
            self._analytics: AnalyticsData = mock_data.load_analytics()
            # Ids are never reused, even after a delete.
            self._last_ids: Dict[str, int] = {
                "requests": _highest_id(self._requests),
                "notifications": _highest_id(self._notifications),
            }

    def clear(self):
        """Empty every collection except users (for empty-state checks)."""
        with self._lock:
            self._properties = {}
            self._requests = {}
            self._documents = {}
            self._notifications = {}

    def _issue_id(self, collection: str) -> str:
        with self._lock:
            self._last_ids[collection] += 1
            return str(self._last_ids[collection])

    # =========================================================================
    # Users
    # =========================================================================

    def get_user(self, user_id: str):
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", entity_id=user_id)
        return user

    def find_user_by_email(self, email: str):
        email = (email or "").strip().lower()
        for user in self._users.values():
            if user.email.lower() == email:
                return user
        return None

    def list_users(self, role: Optional[UserRole] = None) -> list:
        users = list(self._users.values())
        if role is not None:
            users = [u for u in users if u.role == role]
        return users

    def tenants(self) -> List[Tenant]:
        return self.list_users(UserRole.TENANT)

    def service_providers(self) -> List[ServiceProvider]:
        return self.list_users(UserRole.SERVICE_PROVIDER)

    def managers(self) -> List[PropertyManager]:
        return self.list_users(UserRole.PROPERTY_MANAGER)

    # =========================================================================
    # Properties, documents, analytics
    # =========================================================================

    def list_properties(self, manager_id: Optional[str] = None) -> List[Property]:
        properties = list(self._properties.values())
        if manager_id is not None:
            properties = [p for p in properties if p.manager_id == manager_id]
        return properties

    def find_property(self, property_id: Optional[str]) -> Optional[Property]:
        if property_id is None:
            return None
        return self._properties.get(property_id)

    def property_for_tenant(self, tenant: Tenant) -> Optional[Property]:
        for prop in self._properties.values():
            if prop.tenant_id == tenant.id:
                return prop
        return self.find_property(tenant.property_id)

    def list_documents(
        self,
        tenant_id: Optional[str] = None,
        property_id: Optional[str] = None,
    ) -> List[Document]:
        documents = list(self._documents.values())
        if tenant_id is not None:
            documents = [d for d in documents if d.tenant_id == tenant_id]
        if property_id is not None:
            documents = [d for d in documents if d.property_id == property_id]
        return documents

    def analytics(self) -> AnalyticsData:
        return self._analytics

    # =========================================================================
    # Service requests
    # =========================================================================

    def list_service_requests(
        self,
        tenant_id: Optional[str] = None,
        provider_id: Optional[str] = None,
        property_id: Optional[str] = None,
    ) -> List[ServiceRequest]:
        requests = list(self._requests.values())
        if property_id is not None:
            requests = [r for r in requests if r.property_id == property_id]
        if tenant_id is not None:
            requests = [r for r in requests if r.tenant_id == tenant_id]
        if provider_id is not None:
            requests = [r for r in requests if r.assigned_provider_id == provider_id]
        return requests

    def get_service_request(self, request_id: str) -> ServiceRequest:
        request = self._requests.get(request_id)
        if request is None:
            raise NotFoundError(f"Service request {request_id} not found", entity_id=request_id)
        return request

    def view_service_request(self, user, request_id: str) -> ServiceRequest:
        request = self.get_service_request(request_id)
        ensure_can_view(user, request)
        return request

    def submit_service_request(
        self,
        tenant,
        title: str,
        description: str,
        category: ServiceCategory,
        priority: ServiceRequestPriority = ServiceRequestPriority.MEDIUM,
        images: Optional[List[str]] = None,
    ) -> ServiceRequest:
        """Create a pending request against the tenant's property."""
        ensure_tenant(tenant)
        for field_name, value in (("title", title), ("description", description)):
            if not value or not value.strip():
                raise ValidationError(f"{field_name.capitalize()} is required", field=field_name)
        try:
            category = ServiceCategory(category)
        except ValueError:
            raise ValidationError(f"Unknown category: {category}", field="category")

        prop = self.property_for_tenant(tenant)
        if prop is None:
            raise ValidationError("No property is linked to this tenant", field="property_id")

        with self._lock:
            now = self.now()
            request = ServiceRequest(
                id=self._issue_id("requests"),
                title=title.strip(),
                description=description.strip(),
                category=category.value,
                priority=priority,
                status=ServiceRequestStatus.PENDING,
                property_id=prop.id,
                tenant_id=tenant.id,
                images=list(images or []),
                created_at=now,
                updated_at=now,
            )
            self._requests[request.id] = request
            self._notify(
                prop.manager_id,
                NotificationType.SERVICE_REQUEST,
                "New Service Request",
                f"{tenant.name} submitted a new service request: {request.title}",
                f"/dashboard/service-requests/{request.id}",
            )

        get_metrics().record_submission()
        with with_correlation(service_request_id=request.id):
            logger.info(
                "Service request submitted",
                extra_fields={"property_id": prop.id, "priority": request.priority.value},
            )
        return request

    def transition(
        self,
        user,
        request_id: str,
        target: ServiceRequestStatus,
        note: Optional[str] = None,
        actual_cost: Optional[Decimal] = None,
    ) -> ServiceRequest:
        """Apply a provider action (accept, decline, complete)."""
        with self._lock:
            request = self.get_service_request(request_id)
            try:
                ensure_provider_action(user, request, target)
            except InvalidTransitionError:
                get_metrics().record_rejected_transition()
                raise
            updated = apply_transition(request, target, self.now(), note=note, actual_cost=actual_cost)
            return self._save_transition(request, updated)

    def assign(
        self,
        user,
        request_id: str,
        provider_id: str,
        estimated_cost: Optional[Decimal] = None,
    ) -> ServiceRequest:
        """Manager assigns a pending request to a provider."""
        ensure_manager(user, request_id)
        with self._lock:
            request = self.get_service_request(request_id)
            provider = self._users.get(provider_id)
            if provider is None or provider.role != UserRole.SERVICE_PROVIDER:
                raise NotFoundError(f"Service provider {provider_id} not found", entity_id=provider_id)
            try:
                updated = assign_provider(request, provider_id, self.now(), estimated_cost=estimated_cost)
            except InvalidTransitionError:
                get_metrics().record_rejected_transition()
                raise
            updated = self._save_transition(request, updated)
            self._notify(
                provider_id,
                NotificationType.SERVICE_REQUEST,
                "New Work Order",
                f"You have been assigned: {updated.title}",
                f"/dashboard/work-orders/{updated.id}",
            )
            return updated

    def cancel(self, user, request_id: str, note: Optional[str] = None) -> ServiceRequest:
        """Manager cancels an open request."""
        ensure_manager(user, request_id)
        with self._lock:
            request = self.get_service_request(request_id)
            if not is_open(request):
                get_metrics().record_rejected_transition()
                raise InvalidTransitionError(
                    request.status.value, ServiceRequestStatus.CANCELLED.value, entity_id=request_id
                )
            updated = apply_transition(request, ServiceRequestStatus.CANCELLED, self.now(), note=note)
            return self._save_transition(request, updated)

    def add_note(self, user, request_id: str, note: str) -> ServiceRequest:
        with self._lock:
            request = self.view_service_request(user, request_id)
            updated = add_note(request, note, self.now())
            self._requests[request_id] = updated
        with with_correlation(service_request_id=request_id):
            logger.info("Note added to service request")
        return updated

    def _save_transition(self, before: ServiceRequest, after: ServiceRequest) -> ServiceRequest:
        self._requests[after.id] = after
        self._notify(
            after.tenant_id,
            NotificationType.MAINTENANCE,
            "Service Request Updated",
            f"Your request '{after.title}' is now {after.status.value.replace('_', ' ')}",
            f"/dashboard/service-requests/{after.id}",
        )
        get_metrics().record_transition(after.status.value)
        with with_correlation(service_request_id=after.id):
            logger.info(
                f"Service request {after.id} moved to {after.status.value}",
                extra_fields={"from_status": before.status.value},
            )
        return after

    # =========================================================================
    # Notifications
    # =========================================================================

    def _notify(
        self,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        action_url: Optional[str] = None,
    ) -> Notification:
        notification = Notification(
            id=self._issue_id("notifications"),
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            action_url=action_url,
            created_at=self.now(),
        )
        self._notifications[notification.id] = notification
        return notification

    def list_notifications(self, user_id: str) -> List[Notification]:
        """Notifications for a user, newest first."""
        items = [n for n in self._notifications.values() if n.user_id == user_id]
        return sorted(items, key=lambda n: n.created_at, reverse=True)

    def _own_notification(self, user, notification_id: str) -> Notification:
        notification = self._notifications.get(notification_id)
        if notification is None:
            raise NotFoundError(f"Notification {notification_id} not found", entity_id=notification_id)
        if notification.user_id != user.id:
            raise AccessDeniedError("Access denied", entity_id=notification_id)
        return notification

    def mark_notification_read(self, user, notification_id: str) -> Notification:
        with self._lock:
            notification = self._own_notification(user, notification_id)
            updated = notification.model_copy(update={"is_read": True})
            self._notifications[notification_id] = updated
            return updated

    def mark_all_notifications_read(self, user) -> int:
        """Mark every unread notification for ``user`` read; returns how many changed."""
        changed = 0
        with self._lock:
            for key, notification in list(self._notifications.items()):
                if notification.user_id == user.id and not notification.is_read:
                    self._notifications[key] = notification.model_copy(update={"is_read": True})
                    changed += 1
        return changed

    def delete_notification(self, user, notification_id: str) -> None:
        with self._lock:
            self._own_notification(user, notification_id)
            del self._notifications[notification_id]


# =============================================================================
# Process-wide instance
# =============================================================================

_store: Optional[PortalStore] = None


def get_store() -> PortalStore:
    """Get or create the process-wide store (lazy init)."""
    global _store
    if _store is None:
        _store = PortalStore()
    return _store


def reset_store() -> PortalStore:
    """Reload fixtures into the process-wide store."""
    store = get_store()
    store.reset()
    return store
