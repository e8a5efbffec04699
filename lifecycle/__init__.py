"""
Service Request Lifecycle Package

Status/action mapping, transition application, role checks and aggregate
counters for service requests.

Usage:
    from lifecycle import get_status_actions, apply_transition, count_requests

    actions = get_status_actions("assigned")      # (Accept Job, Decline)
    updated = apply_transition(request, "in_progress", now)
    counters = count_requests(requests)
    counters.pending                              # 2
"""

from .transitions import (
    StatusAction,
    ACCEPT,
    DECLINE,
    COMPLETE,
    ASSIGN,
    CANCEL,
    STATUS_ACTIONS,
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    get_status_actions,
    get_manager_actions,
    can_transition,
    is_open,
    apply_transition,
    assign_provider,
    add_note,
)

from .access import (
    can_view,
    ensure_can_view,
    actions_for,
    ensure_provider_action,
    ensure_manager,
    ensure_tenant,
)

from .counters import (
    RequestCounters,
    count_requests,
    total_earnings,
    recent_requests,
)

__all__ = [
    # Actions
    "StatusAction",
    "ACCEPT",
    "DECLINE",
    "COMPLETE",
    "ASSIGN",
    "CANCEL",
    "STATUS_ACTIONS",
    "ALLOWED_TRANSITIONS",
    "TERMINAL_STATUSES",
    "get_status_actions",
    "get_manager_actions",
    "can_transition",
    "is_open",

    # Transitions
    "apply_transition",
    "assign_provider",
    "add_note",

    # Access
    "can_view",
    "ensure_can_view",
    "actions_for",
    "ensure_provider_action",
    "ensure_manager",
    "ensure_tenant",

    # Counters
    "RequestCounters",
    "count_requests",
    "total_earnings",
    "recent_requests",
]
