"""
Service Request Lifecycle

Status flow:
    pending → assigned → in_progress → completed
                 │            └──────→ cancelled
                 └→ pending (provider declines)

The provider-facing action mapping is a total function from status to a
tuple of actions. Managers additionally assign providers (pending →
assigned) and cancel open requests. Every apply function returns a new
``ServiceRequest``; callers decide where to store it.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, FrozenSet, Optional, Tuple

from core.errors import InvalidTransitionError, ValidationError
from models.domain import ServiceRequest, ServiceRequestStatus

Status = ServiceRequestStatus


@dataclass(frozen=True)
class StatusAction:
    """A button on the detail/action panel.

    Attributes:
        key: Stable identifier used by clients ("accept", "decline", ...)
        label: Button text
        target_status: Status the request moves to when the action is taken
        variant: Button style ("default" or "outline")
    """
    key: str
    label: str
    target_status: ServiceRequestStatus
    variant: str = "default"


ACCEPT = StatusAction("accept", "Accept Job", Status.IN_PROGRESS)
DECLINE = StatusAction("decline", "Decline", Status.PENDING, variant="outline")
COMPLETE = StatusAction("complete", "Mark Complete", Status.COMPLETED)

ASSIGN = StatusAction("assign", "Assign Provider", Status.ASSIGNED)
CANCEL = StatusAction("cancel", "Cancel Request", Status.CANCELLED, variant="outline")

STATUS_ACTIONS: Dict[ServiceRequestStatus, Tuple[StatusAction, ...]] = {
    Status.PENDING: (),
    Status.ASSIGNED: (ACCEPT, DECLINE),
    Status.IN_PROGRESS: (COMPLETE,),
    Status.COMPLETED: (),
    Status.CANCELLED: (),
}

ALLOWED_TRANSITIONS: Dict[ServiceRequestStatus, FrozenSet[ServiceRequestStatus]] = {
    Status.PENDING: frozenset({Status.ASSIGNED, Status.CANCELLED}),
    Status.ASSIGNED: frozenset({Status.IN_PROGRESS, Status.PENDING, Status.CANCELLED}),
    Status.IN_PROGRESS: frozenset({Status.COMPLETED, Status.CANCELLED}),
    Status.COMPLETED: frozenset(),
    Status.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset({Status.COMPLETED, Status.CANCELLED})


# =============================================================================
# Queries
# =============================================================================

def get_status_actions(status: ServiceRequestStatus) -> Tuple[StatusAction, ...]:
    """Actions the assigned provider may take from ``status``."""
    return STATUS_ACTIONS[ServiceRequestStatus(status)]


def get_manager_actions(status: ServiceRequestStatus) -> Tuple[StatusAction, ...]:
    """Actions a property manager may take from ``status``."""
    status = ServiceRequestStatus(status)
    if status == Status.PENDING:
        return (ASSIGN, CANCEL)
    if status in TERMINAL_STATUSES:
        return ()
    return (CANCEL,)


def can_transition(current: ServiceRequestStatus, target: ServiceRequestStatus) -> bool:
    return ServiceRequestStatus(target) in ALLOWED_TRANSITIONS[ServiceRequestStatus(current)]


def is_open(request: ServiceRequest) -> bool:
    return request.status not in TERMINAL_STATUSES


# =============================================================================
# Transitions
# =============================================================================

def apply_transition(
    request: ServiceRequest,
    target: ServiceRequestStatus,
    now: datetime,
    note: Optional[str] = None,
    actual_cost: Optional[Decimal] = None,
) -> ServiceRequest:
    """Move a request to ``target`` and return the updated copy.

    Completing stamps ``completed_at`` and may record the actual cost.
    Declining back to pending releases the assigned provider.

    Raises:
        InvalidTransitionError: If the lifecycle does not allow the move
        ValidationError: If a cost is given for anything but completion
    """
    target = ServiceRequestStatus(target)
    if not can_transition(request.status, target):
        raise InvalidTransitionError(request.status.value, target.value, entity_id=request.id)

    if actual_cost is not None and target != Status.COMPLETED:
        raise ValidationError("Actual cost can only be recorded on completion", field="actual_cost")
    if actual_cost is not None and actual_cost < 0:
        raise ValidationError("Actual cost cannot be negative", field="actual_cost")

    update = {"status": target, "updated_at": now}
    if target == Status.COMPLETED:
        update["completed_at"] = now
        if actual_cost is not None:
            update["actual_cost"] = actual_cost
    if target == Status.PENDING:
        update["assigned_provider_id"] = None

    notes = list(request.notes)
    if note and note.strip():
        notes.append(note.strip())
    update["notes"] = notes

    return request.model_copy(update=update)


def assign_provider(
    request: ServiceRequest,
    provider_id: str,
    now: datetime,
    estimated_cost: Optional[Decimal] = None,
) -> ServiceRequest:
    """Assign a pending request to a provider (pending → assigned)."""
    if not provider_id:
        raise ValidationError("A provider must be selected", field="provider_id")
    if estimated_cost is not None and estimated_cost < 0:
        raise ValidationError("Estimated cost cannot be negative", field="estimated_cost")
    if request.status != Status.PENDING:
        raise InvalidTransitionError(request.status.value, Status.ASSIGNED.value, entity_id=request.id)

    updated = apply_transition(request, Status.ASSIGNED, now)
    update = {"assigned_provider_id": provider_id}
    if estimated_cost is not None:
        update["estimated_cost"] = estimated_cost
    return updated.model_copy(update=update)


def add_note(request: ServiceRequest, note: str, now: datetime) -> ServiceRequest:
    """Append a note; notes are append-only."""
    if not note or not note.strip():
        raise ValidationError("Note cannot be empty", field="note")
    return request.model_copy(update={
        "notes": [*request.notes, note.strip()],
        "updated_at": now,
    })
