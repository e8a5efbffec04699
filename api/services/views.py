"""
View Builders for the Property Portal.

Turns store contents into the JSON documents the dashboards render: stat
cards, list items with display strings, and an empty state for every list.

Usage:
    from api.services.views import build_dashboard, service_request_list

    dashboard = build_dashboard(user)
    listing = service_request_list(user, search="leak", status="pending")
"""

import math
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from api.services.store import PortalStore, get_store
from core.config import get_settings
from core.errors import AccessDeniedError, NotFoundError, ValidationError
from core.formatting import (
    first_of_next_month,
    format_currency,
    format_date,
    format_datetime,
    format_file_size,
    humanize_status,
    priority_variant,
    property_status_variant,
    relative_time,
    role_theme,
    status_variant,
    to_datetime,
)
from core.search import group_by, search_items
from lifecycle import actions_for, count_requests, recent_requests, total_earnings
from models.api_responses import (
    ActionOption,
    Badge,
    CallToAction,
    DocumentItem,
    DocumentListResponse,
    EmptyState,
    InvoiceItem,
    InvoiceListResponse,
    ManagerDashboard,
    NotificationItem,
    NotificationListResponse,
    NotificationPanel,
    PropertyDetailResponse,
    PropertyItem,
    PropertyListResponse,
    PropertyPanel,
    ProviderDashboard,
    RequestListResponse,
    RequestPanel,
    ServiceRequestDetailResponse,
    ServiceRequestItem,
    StatCard,
    TenantDashboard,
    TenantDetailResponse,
    TenantItem,
    TenantListResponse,
)
from models.domain import (
    Document,
    DocumentType,
    InvoiceStatus,
    Notification,
    NotificationType,
    Property,
    PropertyStatus,
    ServiceRequest,
    ServiceRequestPriority,
    ServiceRequestStatus,
    Tenant,
    UserRole,
)

UNKNOWN_PROPERTY = "Unknown Property"
FILTERED_DETAIL = "Try adjusting your search or filters"

NEW_REQUEST_HREF = "/dashboard/service-requests/new"
NEW_PROPERTY_HREF = "/dashboard/properties/new"
NEW_TENANT_HREF = "/dashboard/tenants/new"
NEW_INVOICE_HREF = "/dashboard/invoices/new"


# =============================================================================
# Items
# =============================================================================

def _now(store: PortalStore, now: Optional[datetime]) -> datetime:
    return now if now is not None else store.now()


def _property_name(store: PortalStore, property_id: Optional[str]) -> str:
    prop = store.find_property(property_id)
    return prop.name if prop else UNKNOWN_PROPERTY


def _find_user(store: PortalStore, user_id: Optional[str]):
    if not user_id:
        return None
    try:
        return store.get_user(user_id)
    except NotFoundError:
        return None


def request_item(
    request: ServiceRequest,
    store: PortalStore,
    viewer=None,
    now: Optional[datetime] = None,
) -> ServiceRequestItem:
    """Render one service request row; actions are computed for ``viewer``."""
    actions = actions_for(viewer, request) if viewer is not None else ()
    return ServiceRequestItem(
        id=request.id,
        title=request.title,
        category=request.category,
        status=request.status,
        status_badge=Badge(
            value=request.status.value,
            label=humanize_status(request.status),
            variant=status_variant(request.status),
        ),
        priority=request.priority,
        priority_badge=Badge(
            value=request.priority.value,
            label=humanize_status(request.priority),
            variant=priority_variant(request.priority),
        ),
        property_id=request.property_id,
        property_name=_property_name(store, request.property_id),
        assigned_provider_id=request.assigned_provider_id,
        estimated_cost=request.estimated_cost,
        estimated_cost_display=(
            format_currency(request.estimated_cost) if request.estimated_cost is not None else None
        ),
        created_at=request.created_at,
        created_display=format_date(request.created_at),
        updated_ago=relative_time(request.updated_at, _now(store, now)),
        actions=[
            ActionOption(
                key=a.key,
                label=a.label,
                target_status=a.target_status,
                variant=a.variant,
            )
            for a in actions
        ],
    )


def property_item(prop: Property) -> PropertyItem:
    return PropertyItem(
        id=prop.id,
        name=prop.name,
        address=prop.address,
        type=prop.type,
        status=prop.status,
        status_badge=Badge(
            value=prop.status.value,
            label=humanize_status(prop.status),
            variant=property_status_variant(prop.status),
        ),
        rent_amount=prop.rent_amount,
        rent_display=f"{format_currency(prop.rent_amount)}/mo",
        size=prop.size,
        bedrooms=prop.bedrooms,
        bathrooms=prop.bathrooms,
        amenities=list(prop.amenities),
    )


LEASE_VARIANTS = {
    "expired": "destructive",
    "expiring soon": "secondary",
    "active": "default",
}


def whole_months(start, end) -> int:
    """Whole 30-day months from ``start`` to ``end``; negative when ``end`` is earlier."""
    seconds = (to_datetime(end) - to_datetime(start)).total_seconds()
    return math.floor(seconds / (86400 * 30))


def lease_status(lease_end_date, now: datetime) -> Tuple[str, str]:
    """Classify a lease by whole 30-day months left until it ends.

    Returns:
        (status, badge variant); status is "expired", "expiring soon" or "active"
    """
    months_left = whole_months(now, lease_end_date)
    if months_left < 0:
        status = "expired"
    elif months_left <= 2:
        status = "expiring soon"
    else:
        status = "active"
    return status, LEASE_VARIANTS[status]


def tenant_item(tenant: Tenant, store: PortalStore, now: Optional[datetime] = None) -> TenantItem:
    status, variant = lease_status(tenant.lease_end_date, _now(store, now))
    return TenantItem(
        id=tenant.id,
        name=tenant.name,
        email=tenant.email,
        phone=tenant.phone,
        property_id=tenant.property_id,
        property_name=_property_name(store, tenant.property_id),
        rent_amount=tenant.rent_amount,
        rent_display=format_currency(tenant.rent_amount),
        lease_end_date=tenant.lease_end_date,
        lease_end_display=format_date(tenant.lease_end_date),
        lease_status=status,
        lease_status_variant=variant,
    )


def document_item(document: Document) -> DocumentItem:
    return DocumentItem(
        id=document.id,
        name=document.name,
        type=document.type,
        url=document.url,
        size=document.size,
        size_display=format_file_size(document.size),
        created_display=format_date(document.created_at),
        tags=list(document.tags),
    )


def notification_item(notification: Notification, now: datetime) -> NotificationItem:
    return NotificationItem(
        id=notification.id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        is_read=notification.is_read,
        action_url=notification.action_url,
        created_at=notification.created_at,
        time_ago=relative_time(notification.created_at, now),
    )


INVOICE_VARIANTS = {
    InvoiceStatus.PAID: "default",
    InvoiceStatus.PENDING: "secondary",
    InvoiceStatus.OVERDUE: "destructive",
}

# Payment state is simulated: invoices rotate paid, pending, overdue in order.
INVOICE_CYCLE = (InvoiceStatus.PAID, InvoiceStatus.PENDING, InvoiceStatus.OVERDUE)
PAYMENT_TERMS = timedelta(days=30)


def invoice_items(
    work_orders: List[ServiceRequest],
    store: PortalStore,
    now: Optional[datetime] = None,
) -> List[InvoiceItem]:
    """One invoice per completed work order that has an actual cost."""
    now = _now(store, now)
    billable = [
        r for r in work_orders
        if r.status == ServiceRequestStatus.COMPLETED and r.actual_cost
    ]

    items = []
    for index, order in enumerate(billable):
        status = INVOICE_CYCLE[index % len(INVOICE_CYCLE)]
        issued = order.completed_at or order.updated_at
        due = issued + PAYMENT_TERMS
        items.append(InvoiceItem(
            id=f"INV-{index + 1:03d}",
            work_order_id=order.id,
            title=order.title,
            description=order.description,
            property_id=order.property_id,
            property_name=_property_name(store, order.property_id),
            amount=order.actual_cost,
            amount_display=format_currency(order.actual_cost),
            status=status,
            status_badge=Badge(
                value=status.value,
                label=humanize_status(status),
                variant=INVOICE_VARIANTS[status],
            ),
            issue_date=issued,
            issue_display=format_date(issued),
            due_date=due,
            due_display=format_date(due),
            is_overdue=to_datetime(due) < to_datetime(now) and status != InvoiceStatus.PAID,
        ))
    return items


def _notification_panel(user, store: PortalStore, limit: int) -> NotificationPanel:
    notifications = store.list_notifications(user.id)
    now = store.now()
    return NotificationPanel(
        items=[notification_item(n, now) for n in notifications[:limit]],
        unread_count=sum(1 for n in notifications if not n.is_read),
        empty_state=None if notifications else EmptyState(message="No notifications"),
    )


# =============================================================================
# Dashboards
# =============================================================================

def _percent(part: int, whole: int) -> int:
    """Whole-number percentage, half rounding up; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def build_manager_dashboard(user, store: PortalStore) -> ManagerDashboard:
    limit = get_settings().recent_items
    properties = store.list_properties()
    requests = store.list_service_requests()
    counters = count_requests(requests)

    occupied = [p for p in properties if p.status == PropertyStatus.OCCUPIED]
    vacant = sum(1 for p in properties if p.status == PropertyStatus.VACANT)
    maintenance = sum(1 for p in properties if p.status == PropertyStatus.MAINTENANCE)
    monthly_revenue = sum((p.rent_amount for p in occupied), Decimal("0"))

    stats = [
        StatCard(
            title="Total Properties",
            value=len(properties),
            description=f"{len(occupied)} occupied • {vacant} vacant",
            color="blue",
        ),
        StatCard(
            title="Monthly Revenue",
            value=format_currency(monthly_revenue),
            description=f"{_percent(len(occupied), len(properties))}% occupancy rate",
            color="green",
        ),
        StatCard(
            title="Service Requests",
            value=counters.total,
            description=f"{counters.pending} pending review",
            color="purple",
        ),
        StatCard(
            title="Maintenance Issues",
            value=maintenance,
            description="Properties needing attention",
            color="red",
        ),
    ]

    recent = recent_requests(requests, limit=limit)
    add_property = CallToAction(label="Add Property", href=NEW_PROPERTY_HREF)

    return ManagerDashboard(
        greeting=f"Welcome back, {user.name}",
        subtitle="Here's what's happening with your properties today.",
        theme=role_theme(user.role),
        stats=stats,
        primary_action=add_property,
        recent_requests=RequestPanel(
            title="Recent Service Requests",
            items=[request_item(r, store, viewer=user) for r in recent],
            empty_state=None if recent else EmptyState(message="No recent service requests"),
            view_all=CallToAction(label="View All", href="/dashboard/service-requests"),
        ),
        properties=PropertyPanel(
            title="Properties",
            items=[property_item(p) for p in properties[:limit]],
            empty_state=None if properties else EmptyState(
                message="No properties found",
                action=add_property,
            ),
            view_all=CallToAction(label="View All", href="/dashboard/properties"),
        ),
        notifications=_notification_panel(user, store, limit),
        analytics=store.analytics(),
    )


def build_tenant_dashboard(user, store: PortalStore) -> TenantDashboard:
    limit = get_settings().recent_items
    prop = store.property_for_tenant(user)
    requests = store.list_service_requests(tenant_id=user.id)
    documents = store.list_documents(tenant_id=user.id)
    counters = count_requests(requests)
    next_due = first_of_next_month(store.now())
    lease, _ = lease_status(user.lease_end_date, store.now())

    if user.rent_amount:
        rent = user.rent_amount
    elif prop is not None:
        rent = prop.rent_amount
    else:
        rent = Decimal("0")

    stats = [
        StatCard(
            title="Monthly Rent",
            value=format_currency(rent),
            description=f"Next due: {format_date(next_due)}",
            color="green",
        ),
        StatCard(
            title="Service Requests",
            value=counters.total,
            description=f"{counters.pending} pending",
            color="blue",
        ),
        StatCard(
            title="Lease Status",
            value=humanize_status(lease),
            description=f"Expires: {format_date(user.lease_end_date)}",
            color="purple",
        ),
        StatCard(
            title="Documents",
            value=len(documents),
            description="Available for download",
            color="orange",
        ),
    ]

    submit = CallToAction(label="Submit Request", href=NEW_REQUEST_HREF)
    recent = recent_requests(requests, limit=limit)

    return TenantDashboard(
        greeting=f"Welcome back, {user.name}",
        subtitle="Manage your rental and service requests.",
        theme=role_theme(user.role),
        stats=stats,
        primary_action=submit,
        property=property_item(prop) if prop else None,
        property_empty_state=None if prop else EmptyState(
            message="No property information available",
        ),
        service_requests=RequestPanel(
            title="Your Service Requests",
            items=[request_item(r, store, viewer=user) for r in recent],
            empty_state=None if recent else EmptyState(
                message="No service requests yet",
                action=submit,
            ),
            view_all=CallToAction(label="View All", href="/dashboard/service-requests"),
        ),
        lease_end_date=user.lease_end_date,
        next_rent_due=next_due,
        notifications=_notification_panel(user, store, limit),
    )


def build_provider_dashboard(user, store: PortalStore) -> ProviderDashboard:
    limit = get_settings().recent_items
    work_orders = store.list_service_requests(provider_id=user.id)
    completed = [r for r in work_orders if r.status == ServiceRequestStatus.COMPLETED]
    counters = count_requests(work_orders)

    stats = [
        StatCard(
            title="Active Jobs",
            value=counters.active,
            description=f"{counters.assigned} pending • {counters.in_progress} in progress",
            color="orange",
        ),
        StatCard(
            title="Completed Jobs",
            value=user.completed_jobs,
            description=f"{len(completed)} this month",
            color="green",
        ),
        StatCard(
            title="Total Earnings",
            value=format_currency(total_earnings(completed)),
            description="From completed jobs",
            color="purple",
        ),
        StatCard(
            title="Rating",
            value=user.rating,
            description="Average customer rating",
            color="blue",
        ),
    ]

    return ProviderDashboard(
        greeting=f"Welcome back, {user.name}",
        subtitle="Manage your work orders and grow your business.",
        theme=role_theme(user.role),
        stats=stats,
        availability=humanize_status(user.availability),
        work_orders=RequestPanel(
            title="Work Orders",
            items=[request_item(r, store, viewer=user) for r in work_orders],
            empty_state=None if work_orders else EmptyState(
                message="No active work orders",
                detail="New assignments will appear here",
            ),
            view_all=CallToAction(label="View All", href="/dashboard/work-orders"),
        ),
        notifications=_notification_panel(user, store, limit),
    )


DASHBOARD_BUILDERS: Dict[UserRole, Callable] = {
    UserRole.PROPERTY_MANAGER: build_manager_dashboard,
    UserRole.TENANT: build_tenant_dashboard,
    UserRole.SERVICE_PROVIDER: build_provider_dashboard,
}


def build_dashboard(user, store: Optional[PortalStore] = None):
    """Select and build the dashboard for the user's role.

    Raises:
        ValueError: If the role has no dashboard
    """
    store = store or get_store()
    try:
        builder = DASHBOARD_BUILDERS[UserRole(user.role)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown role: {user.role}")
    return builder(user, store)


# =============================================================================
# List views
# =============================================================================

def _is_filtering(value) -> bool:
    return value is not None and getattr(value, "value", value) != "all"


def _parse(enum, value, field: str):
    """Coerce a filter value to ``enum``; None when the filter is absent or "all"."""
    if not _is_filtering(value):
        return None
    try:
        return enum(getattr(value, "value", value))
    except ValueError:
        raise ValidationError(f"Unknown {field}: {value}", field=field)


def _has_search(search: Optional[str]) -> bool:
    return bool(search and search.strip())


def _requests_for(user, store: PortalStore) -> List[ServiceRequest]:
    role = UserRole(user.role)
    if role == UserRole.TENANT:
        return store.list_service_requests(tenant_id=user.id)
    if role == UserRole.SERVICE_PROVIDER:
        return store.list_service_requests(provider_id=user.id)
    return store.list_service_requests()


def _filter_requests(
    requests: List[ServiceRequest],
    search: Optional[str],
    status: Optional[str],
    priority: Optional[str],
) -> List[ServiceRequest]:
    wanted_status = _parse(ServiceRequestStatus, status, "status")
    wanted_priority = _parse(ServiceRequestPriority, priority, "priority")
    result = search_items(requests, search or "", ("title", "description"))
    if wanted_status is not None:
        result = [r for r in result if r.status == wanted_status]
    if wanted_priority is not None:
        result = [r for r in result if r.priority == wanted_priority]
    return sorted(result, key=lambda r: r.created_at, reverse=True)


def _request_stats(role: UserRole, counters) -> List[StatCard]:
    if role == UserRole.PROPERTY_MANAGER:
        return [
            StatCard(title="Pending Review", value=counters.pending, color="red"),
            StatCard(title="Assigned", value=counters.assigned, color="blue"),
            StatCard(title="In Progress", value=counters.in_progress, color="orange"),
            StatCard(title="Completed", value=counters.completed, color="green"),
        ]
    if role == UserRole.TENANT:
        return [
            StatCard(title="Total", value=counters.total, color="blue"),
            StatCard(title="Pending", value=counters.pending, color="red"),
            StatCard(title="In Progress", value=counters.active, color="orange"),
            StatCard(title="Completed", value=counters.completed, color="green"),
        ]
    return [
        StatCard(title="Assigned", value=counters.assigned, color="blue"),
        StatCard(title="In Progress", value=counters.in_progress, color="orange"),
        StatCard(title="Completed", value=counters.completed, color="green"),
    ]


def service_request_list(
    user,
    store: Optional[PortalStore] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
) -> RequestListResponse:
    """Service requests visible to ``user``, filtered and sorted newest first."""
    store = store or get_store()
    role = UserRole(user.role)
    requests = _requests_for(user, store)
    counters = count_requests(requests)
    items = _filter_requests(requests, search, status, priority)

    filtering = _has_search(search) or _is_filtering(status) or _is_filtering(priority)
    empty_state = None
    if not items:
        empty_state = EmptyState(
            message="No service requests found",
            detail=FILTERED_DETAIL if filtering else "No service requests have been submitted yet",
            action=(
                CallToAction(label="Submit Your First Request", href=NEW_REQUEST_HREF)
                if role == UserRole.TENANT and not filtering else None
            ),
        )

    return RequestListResponse(
        title="Service Requests",
        stats=_request_stats(role, counters),
        counts=counters.status_dict(),
        priority_counts=counters.priority_dict(),
        items=[request_item(r, store, viewer=user) for r in items],
        total=counters.total,
        empty_state=empty_state,
        primary_action=(
            CallToAction(label="Submit Request", href=NEW_REQUEST_HREF)
            if role == UserRole.TENANT else None
        ),
    )


def work_order_list(
    user,
    store: Optional[PortalStore] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> RequestListResponse:
    """Requests assigned to the signed-in provider."""
    store = store or get_store()
    if UserRole(user.role) != UserRole.SERVICE_PROVIDER:
        raise AccessDeniedError("Only service providers have work orders")

    work_orders = store.list_service_requests(provider_id=user.id)
    counters = count_requests(work_orders)
    items = _filter_requests(work_orders, search, status, None)
    filtering = _has_search(search) or _is_filtering(status)

    stats = [
        StatCard(title="Assigned", value=counters.assigned, description="Awaiting acceptance", color="blue"),
        StatCard(title="In Progress", value=counters.in_progress, description="Currently working", color="orange"),
        StatCard(title="Completed", value=counters.completed, description="This month", color="green"),
        StatCard(
            title="Emergency",
            value=counters.priority(ServiceRequestPriority.EMERGENCY),
            description="High priority",
            color="red",
        ),
    ]

    return RequestListResponse(
        title="Work Orders",
        stats=stats,
        counts=counters.status_dict(),
        priority_counts=counters.priority_dict(),
        items=[request_item(r, store, viewer=user) for r in items],
        total=counters.total,
        empty_state=None if items else EmptyState(
            message="No work orders found",
            detail=FILTERED_DETAIL if filtering else "No work orders have been assigned to you yet",
        ),
    )


def property_list(
    user,
    store: Optional[PortalStore] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> PropertyListResponse:
    store = store or get_store()
    if UserRole(user.role) != UserRole.PROPERTY_MANAGER:
        raise AccessDeniedError("Only property managers can list properties")

    wanted = _parse(PropertyStatus, status, "status")
    properties = store.list_properties()
    items = search_items(properties, search or "", ("name", "address"))
    if wanted is not None:
        items = [p for p in items if p.status == wanted]
    filtering = _has_search(search) or _is_filtering(status)

    by_status = group_by(properties, lambda p: p.status)
    counts = {s.value: len(by_status.get(s, [])) for s in PropertyStatus}

    empty_state = None
    if not items:
        empty_state = EmptyState(
            message="No properties found",
            detail=FILTERED_DETAIL if filtering else "Get started by adding your first property",
            action=None if filtering else CallToAction(
                label="Add Your First Property", href=NEW_PROPERTY_HREF,
            ),
        )

    return PropertyListResponse(
        counts=counts,
        items=[property_item(p) for p in items],
        total=len(properties),
        empty_state=empty_state,
        primary_action=CallToAction(label="Add Property", href=NEW_PROPERTY_HREF),
    )


def tenant_list(
    user,
    store: Optional[PortalStore] = None,
    search: Optional[str] = None,
) -> TenantListResponse:
    store = store or get_store()
    if UserRole(user.role) != UserRole.PROPERTY_MANAGER:
        raise AccessDeniedError("Only property managers can list tenants")

    now = store.now()
    tenants = store.tenants()
    rows = [tenant_item(t, store, now) for t in tenants]
    revenue = sum((t.rent_amount for t in tenants), Decimal("0"))
    average = revenue / len(tenants) if tenants else Decimal("0")
    expiring = sum(1 for row in rows if row.lease_status == "expiring soon")

    stats = [
        StatCard(title="Total Tenants", value=len(tenants), description="Active leases", color="blue"),
        StatCard(
            title="Monthly Revenue",
            value=format_currency(revenue),
            description="From active leases",
            color="green",
        ),
        StatCard(
            title="Expiring Soon",
            value=expiring,
            description="Leases ending within 2 months",
            color="orange",
        ),
        StatCard(title="Average Rent", value=format_currency(average), description="Per unit", color="purple"),
    ]

    items = search_items(rows, search or "", ("name", "email"))
    filtering = _has_search(search)
    empty_state = None
    if not items:
        empty_state = EmptyState(
            message="No tenants found",
            detail=FILTERED_DETAIL if filtering else "Get started by adding your first tenant",
            action=None if filtering else CallToAction(
                label="Add Your First Tenant", href=NEW_TENANT_HREF,
            ),
        )

    return TenantListResponse(stats=stats, items=items, total=len(tenants), empty_state=empty_state)


def document_list(
    user,
    store: Optional[PortalStore] = None,
    search: Optional[str] = None,
    type: Optional[str] = None,
) -> DocumentListResponse:
    """Tenants see their own documents; managers see every document."""
    store = store or get_store()
    role = UserRole(user.role)
    if role == UserRole.TENANT:
        documents = store.list_documents(tenant_id=user.id)
    elif role == UserRole.PROPERTY_MANAGER:
        documents = store.list_documents()
    else:
        raise AccessDeniedError("Documents are not available to service providers")

    wanted = _parse(DocumentType, type, "type")
    items = search_items(documents, search or "", ("name", "tags"))
    if wanted is not None:
        items = [d for d in items if d.type == wanted]
    filtering = _has_search(search) or _is_filtering(type)

    empty_state = None
    if not items:
        if filtering:
            detail = FILTERED_DETAIL
        elif role == UserRole.TENANT:
            detail = "No documents have been shared with you yet"
        else:
            detail = "Get started by uploading your first document"
        empty_state = EmptyState(message="No documents found", detail=detail)

    return DocumentListResponse(
        items=[document_item(d) for d in items],
        total=len(documents),
        empty_state=empty_state,
    )


def notification_list(
    user,
    store: Optional[PortalStore] = None,
    type: Optional[NotificationType] = None,
    unread_only: bool = False,
) -> NotificationListResponse:
    store = store or get_store()
    wanted = _parse(NotificationType, type, "type")
    notifications = store.list_notifications(user.id)

    by_type = group_by(notifications, lambda n: n.type)
    counts = {t.value: len(by_type.get(t, [])) for t in NotificationType}

    items = notifications
    if wanted is not None:
        items = [n for n in items if n.type == wanted]
    if unread_only:
        items = [n for n in items if not n.is_read]

    now = store.now()
    return NotificationListResponse(
        items=[notification_item(n, now) for n in items],
        total=len(notifications),
        unread_count=sum(1 for n in notifications if not n.is_read),
        counts_by_type=counts,
        empty_state=None if items else EmptyState(message="No notifications"),
    )


def invoice_list(
    user,
    store: Optional[PortalStore] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> InvoiceListResponse:
    """Invoices for the signed-in provider's completed work orders."""
    store = store or get_store()
    if UserRole(user.role) != UserRole.SERVICE_PROVIDER:
        raise AccessDeniedError("Only service providers have invoices")

    wanted = _parse(InvoiceStatus, status, "status")
    now = store.now()
    invoices = invoice_items(store.list_service_requests(provider_id=user.id), store, now)

    by_status = group_by(invoices, lambda inv: inv.status)
    counts = {s.value: len(by_status.get(s, [])) for s in InvoiceStatus}

    def total_for(state: InvoiceStatus) -> Decimal:
        return sum((inv.amount for inv in by_status.get(state, [])), Decimal("0"))

    this_month = sum(
        (
            inv.amount for inv in by_status.get(InvoiceStatus.PAID, [])
            if (inv.issue_date.year, inv.issue_date.month) == (now.year, now.month)
        ),
        Decimal("0"),
    )

    stats = [
        StatCard(
            title="Total Paid",
            value=format_currency(total_for(InvoiceStatus.PAID)),
            description=f"{counts['paid']} invoices",
            color="green",
        ),
        StatCard(
            title="Pending Payment",
            value=format_currency(total_for(InvoiceStatus.PENDING)),
            description=f"{counts['pending']} invoices",
            color="orange",
        ),
        StatCard(
            title="Overdue",
            value=format_currency(total_for(InvoiceStatus.OVERDUE)),
            description=f"{counts['overdue']} invoices",
            color="red",
        ),
        StatCard(title="This Month", value=format_currency(this_month), description="Earnings", color="blue"),
    ]

    items = search_items(invoices, search or "", ("title", "id"))
    if wanted is not None:
        items = [inv for inv in items if inv.status == wanted]
    filtering = _has_search(search) or wanted is not None

    empty_state = None
    if not items:
        empty_state = EmptyState(
            message="No invoices found",
            detail=FILTERED_DETAIL if filtering else "No invoices have been generated yet",
            action=None if filtering else CallToAction(
                label="Create Your First Invoice", href=NEW_INVOICE_HREF,
            ),
        )

    return InvoiceListResponse(
        stats=stats,
        counts=counts,
        items=items,
        total=len(invoices),
        empty_state=empty_state,
        primary_action=CallToAction(label="Create Invoice", href=NEW_INVOICE_HREF),
    )


# =============================================================================
# Detail
# =============================================================================

def service_request_detail(
    user,
    request_id: str,
    store: Optional[PortalStore] = None,
) -> ServiceRequestDetailResponse:
    """Detail/action panel: the request, its resolved references and the
    actions ``user`` may take.

    Raises:
        NotFoundError: If the request does not exist
        AccessDeniedError: If ``user`` may not view it
    """
    store = store or get_store()
    request = store.view_service_request(user, request_id)

    providers = []
    if UserRole(user.role) == UserRole.PROPERTY_MANAGER and request.status == ServiceRequestStatus.PENDING:
        providers = store.service_providers()

    return ServiceRequestDetailResponse(
        request=request_item(request, store, viewer=user),
        description=request.description,
        images=list(request.images),
        notes=list(request.notes),
        estimated_cost_display=(
            format_currency(request.estimated_cost) if request.estimated_cost is not None else None
        ),
        actual_cost=request.actual_cost,
        actual_cost_display=(
            format_currency(request.actual_cost) if request.actual_cost is not None else None
        ),
        created_display=format_datetime(request.created_at),
        completed_display=format_datetime(request.completed_at) if request.completed_at else None,
        property=store.find_property(request.property_id),
        tenant=_find_user(store, request.tenant_id),
        provider=_find_user(store, request.assigned_provider_id),
        available_providers=providers,
    )


def _newest_first(requests: List[ServiceRequest]) -> List[ServiceRequest]:
    return sorted(requests, key=lambda r: r.created_at, reverse=True)


def property_detail(
    user,
    property_id: str,
    store: Optional[PortalStore] = None,
) -> PropertyDetailResponse:
    """Property page for managers.

    Raises:
        AccessDeniedError: If ``user`` is not a property manager
        NotFoundError: If the property does not exist
    """
    store = store or get_store()
    if UserRole(user.role) != UserRole.PROPERTY_MANAGER:
        raise AccessDeniedError("Only property managers can view property details")
    prop = store.find_property(property_id)
    if prop is None:
        raise NotFoundError("Property not found", entity_id=property_id)

    tenant = _find_user(store, prop.tenant_id)
    requests = _newest_first(store.list_service_requests(property_id=prop.id))
    documents = store.list_documents(property_id=prop.id)
    counters = count_requests(requests)

    stats = [
        StatCard(title="Status", value=humanize_status(prop.status), color="blue"),
        StatCard(title="Monthly Rent", value=format_currency(prop.rent_amount), color="green"),
        StatCard(title="Size", value=prop.size, description="square feet", color="purple"),
        StatCard(
            title="Service Requests",
            value=counters.total,
            description=f"{counters.pending} pending",
            color="orange",
        ),
    ]
    per_sqft = prop.rent_amount / prop.size if prop.size else Decimal("0")

    return PropertyDetailResponse(
        property=property_item(prop),
        description=prop.description,
        units=prop.units,
        stats=stats,
        annual_revenue_display=format_currency(prop.rent_amount * 12),
        price_per_sqft_display=format_currency(per_sqft),
        added_display=format_date(prop.created_at),
        tenant=tenant_item(tenant, store) if isinstance(tenant, Tenant) else None,
        tenant_empty_state=None if isinstance(tenant, Tenant) else EmptyState(
            message="No tenant assigned",
            detail="This property is currently vacant",
        ),
        service_requests=RequestPanel(
            title="Service Requests",
            items=[request_item(r, store, viewer=user) for r in requests],
            empty_state=None if requests else EmptyState(
                message="No service requests for this property",
            ),
        ),
        documents=[document_item(d) for d in documents],
        documents_empty_state=None if documents else EmptyState(
            message="No documents uploaded yet",
            detail="Upload property documents, leases, and certificates",
        ),
    )


def tenant_detail(
    user,
    tenant_id: str,
    store: Optional[PortalStore] = None,
) -> TenantDetailResponse:
    """Tenant page for managers: lease terms, property and request history.

    Raises:
        AccessDeniedError: If ``user`` is not a property manager
        NotFoundError: If no tenant has this id
    """
    store = store or get_store()
    if UserRole(user.role) != UserRole.PROPERTY_MANAGER:
        raise AccessDeniedError("Only property managers can view tenant details")
    tenant = _find_user(store, tenant_id)
    if not isinstance(tenant, Tenant):
        raise NotFoundError("Tenant not found", entity_id=tenant_id)

    now = store.now()
    status, _ = lease_status(tenant.lease_end_date, now)
    tenure = max(whole_months(tenant.lease_start_date, now), 0)
    prop = store.property_for_tenant(tenant)
    requests = _newest_first(store.list_service_requests(tenant_id=tenant.id))
    counters = count_requests(requests)

    stats = [
        StatCard(
            title="Lease Status",
            value=humanize_status(status),
            description=f"Expires: {format_date(tenant.lease_end_date)}",
            color="purple",
        ),
        StatCard(title="Monthly Rent", value=format_currency(tenant.rent_amount), color="green"),
        StatCard(
            title="Service Requests",
            value=counters.total,
            description=f"{counters.pending} pending",
            color="blue",
        ),
        StatCard(
            title="Tenant Since",
            value=format_date(tenant.lease_start_date),
            description=f"{tenure} months",
            color="orange",
        ),
    ]

    return TenantDetailResponse(
        tenant=tenant_item(tenant, store, now),
        emergency_contact=tenant.emergency_contact,
        stats=stats,
        lease_start_date=tenant.lease_start_date,
        lease_start_display=format_date(tenant.lease_start_date),
        lease_duration_months=whole_months(tenant.lease_start_date, tenant.lease_end_date),
        months_as_tenant=tenure,
        annual_revenue_display=format_currency(tenant.rent_amount * 12),
        security_deposit_display=format_currency(tenant.rent_amount),
        total_paid_display=format_currency(tenant.rent_amount * tenure),
        property=property_item(prop) if prop else None,
        property_empty_state=None if prop else EmptyState(
            message="No property assigned",
            detail="This tenant is not currently assigned to any property",
        ),
        service_requests=RequestPanel(
            title="Service Requests",
            items=[request_item(r, store, viewer=user, now=now) for r in requests],
            empty_state=None if requests else EmptyState(
                message="No service requests from this tenant",
            ),
        ),
        documents=[document_item(d) for d in store.list_documents(tenant_id=tenant.id)],
    )
