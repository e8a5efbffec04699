"""API Services Package."""

from api.services.store import PortalStore, get_store, reset_store
from api.services.data_context import (
    Session,
    get_data_for_user,
    login,
    logout,
    switch_user,
    resolve_session,
    clear_sessions,
)
from api.services.views import (
    build_dashboard,
    service_request_list,
    work_order_list,
    property_list,
    tenant_list,
    document_list,
    notification_list,
    service_request_detail,
    request_item,
)

__all__ = [
    # Store
    "PortalStore",
    "get_store",
    "reset_store",

    # Data context & sessions
    "Session",
    "get_data_for_user",
    "login",
    "logout",
    "switch_user",
    "resolve_session",
    "clear_sessions",

    # Views
    "build_dashboard",
    "service_request_list",
    "work_order_list",
    "property_list",
    "tenant_list",
    "document_list",
    "notification_list",
    "service_request_detail",
    "request_item",
]
