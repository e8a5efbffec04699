"""
Role checks for service-request operations.

- Tenants see and annotate their own requests, and submit new ones.
- Providers see requests assigned to them and drive them through the
  provider action mapping.
- Managers see every request, assign providers and cancel open requests.
"""

from typing import Tuple

from core.errors import AccessDeniedError, InvalidTransitionError
from lifecycle.transitions import StatusAction, get_manager_actions, get_status_actions
from models.domain import ServiceRequest, ServiceRequestStatus, UserRole


def can_view(user, request: ServiceRequest) -> bool:
    role = UserRole(user.role)
    if role == UserRole.PROPERTY_MANAGER:
        return True
    if role == UserRole.TENANT:
        return request.tenant_id == user.id
    if role == UserRole.SERVICE_PROVIDER:
        return request.assigned_provider_id == user.id
    raise ValueError(f"Unknown role: {user.role}")


def ensure_can_view(user, request: ServiceRequest) -> None:
    if not can_view(user, request):
        raise AccessDeniedError("Access denied", entity_id=request.id)


def actions_for(user, request: ServiceRequest) -> Tuple[StatusAction, ...]:
    """Buttons the detail panel shows ``user`` for ``request``."""
    role = UserRole(user.role)
    if role == UserRole.SERVICE_PROVIDER and request.assigned_provider_id == user.id:
        return get_status_actions(request.status)
    if role == UserRole.PROPERTY_MANAGER:
        return get_manager_actions(request.status)
    return ()


def ensure_provider_action(user, request: ServiceRequest, target: ServiceRequestStatus) -> StatusAction:
    """Return the provider action reaching ``target``, or refuse.

    Raises:
        AccessDeniedError: If ``user`` is not the assigned provider
        InvalidTransitionError: If no provider action reaches ``target``
    """
    if UserRole(user.role) != UserRole.SERVICE_PROVIDER or request.assigned_provider_id != user.id:
        raise AccessDeniedError(
            "Only the assigned service provider can update this request",
            entity_id=request.id,
        )
    target = ServiceRequestStatus(target)
    for action in get_status_actions(request.status):
        if action.target_status == target:
            return action
    raise InvalidTransitionError(request.status.value, target.value, entity_id=request.id)


def ensure_manager(user, request_id: str = None) -> None:
    if UserRole(user.role) != UserRole.PROPERTY_MANAGER:
        raise AccessDeniedError("Only the property manager can do this", entity_id=request_id)


def ensure_tenant(user) -> None:
    if UserRole(user.role) != UserRole.TENANT:
        raise AccessDeniedError("Only tenants can submit service requests")
