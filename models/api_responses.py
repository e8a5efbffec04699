"""
API Request/Response Models for the Property Portal.

These Pydantic models define the data contracts between the API and the
dashboard UI. Every list carries its own empty state so clients never have
to invent the "nothing here" copy.

Hierarchy:
- DashboardResponse: discriminated on role (manager | tenant | provider)
- RequestListResponse: service-request and work-order list views
- PropertyListResponse / TenantListResponse / DocumentListResponse
- NotificationListResponse / InvoiceListResponse
- ServiceRequestDetailResponse: detail/action panel
- PropertyDetailResponse / TenantDetailResponse: manager detail pages
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.domain import (
    AnalyticsData,
    DocumentType,
    EmergencyContact,
    InvoiceStatus,
    Money,
    NotificationType,
    Property,
    PropertyStatus,
    PropertyType,
    ServiceCategory,
    ServiceProvider,
    ServiceRequestPriority,
    ServiceRequestStatus,
    Tenant,
    User,
    UserData,
)


# =============================================================================
# BASE MODELS
# =============================================================================

class ResponseBase(BaseModel):
    """Base class for all API responses."""
    model_config = ConfigDict(populate_by_name=True)


class CallToAction(ResponseBase):
    """Primary link shown with a panel or an empty state."""
    label: str
    href: str


class EmptyState(ResponseBase):
    """What a list renders when it has no items."""
    message: str = Field(..., description="Headline, e.g. 'No properties found'")
    detail: Optional[str] = Field(None, description="Secondary line")
    action: Optional[CallToAction] = None


class StatCard(ResponseBase):
    """One summary card at the top of a dashboard or list view."""
    title: str
    value: Union[int, float, str]
    description: str = ""
    color: str = Field(default="blue", description="Accent colour: blue, green, purple, red, orange")


class Badge(ResponseBase):
    value: str
    label: str
    variant: str = Field(..., description="UI badge variant: default, secondary, outline, destructive")


class ActionOption(ResponseBase):
    """A button on the detail/action panel."""
    key: str
    label: str
    target_status: ServiceRequestStatus
    variant: str = "default"


# =============================================================================
# LIST ITEMS
# =============================================================================

class ServiceRequestItem(ResponseBase):
    """Service request row (also used for work orders)."""
    id: str
    title: str
    category: str
    status: ServiceRequestStatus
    status_badge: Badge
    priority: ServiceRequestPriority
    priority_badge: Badge
    property_id: str
    property_name: str
    assigned_provider_id: Optional[str] = None
    estimated_cost: Optional[Money] = None
    estimated_cost_display: Optional[str] = None
    created_at: datetime
    created_display: str = Field(..., description="e.g. 'Oct 20, 2024'")
    updated_ago: str = Field(..., description="Relative time since last update")
    actions: List[ActionOption] = Field(default_factory=list)


class PropertyItem(ResponseBase):
    id: str
    name: str
    address: str
    type: PropertyType
    status: PropertyStatus
    status_badge: Badge
    rent_amount: Money
    rent_display: str = Field(..., description="e.g. '$2,500/mo'")
    size: int
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    amenities: List[str] = Field(default_factory=list)


class TenantItem(ResponseBase):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    property_id: str
    property_name: str
    rent_amount: Money
    rent_display: str
    lease_end_date: date
    lease_end_display: str
    lease_status: Literal["active", "expiring soon", "expired"]
    lease_status_variant: str


class DocumentItem(ResponseBase):
    id: str
    name: str
    type: DocumentType
    url: str
    size: int
    size_display: str = Field(..., description="e.g. '240 KB'")
    created_display: str
    tags: List[str] = Field(default_factory=list)


class NotificationItem(ResponseBase):
    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    action_url: Optional[str] = None
    created_at: datetime
    time_ago: str


class InvoiceItem(ResponseBase):
    """Invoice raised for a completed work order."""
    id: str = Field(..., description="e.g. 'INV-001'")
    work_order_id: str
    title: str
    description: str
    property_id: str
    property_name: str
    amount: Money
    amount_display: str
    status: InvoiceStatus
    status_badge: Badge
    issue_date: datetime
    issue_display: str
    due_date: datetime
    due_display: str
    is_overdue: bool = Field(..., description="Past due and not yet paid")


# =============================================================================
# PANELS
# =============================================================================

class RequestPanel(ResponseBase):
    title: str
    items: List[ServiceRequestItem] = Field(default_factory=list)
    empty_state: Optional[EmptyState] = None
    view_all: Optional[CallToAction] = None


class PropertyPanel(ResponseBase):
    title: str
    items: List[PropertyItem] = Field(default_factory=list)
    empty_state: Optional[EmptyState] = None
    view_all: Optional[CallToAction] = None


class NotificationPanel(ResponseBase):
    title: str = "Notifications"
    items: List[NotificationItem] = Field(default_factory=list)
    unread_count: int = 0
    empty_state: Optional[EmptyState] = None


# =============================================================================
# DASHBOARDS
# =============================================================================

class DashboardBase(ResponseBase):
    greeting: str = Field(..., description="e.g. 'Welcome back, Sarah Johnson'")
    subtitle: str
    theme: str = Field(..., description="Role accent colour")
    stats: List[StatCard] = Field(default_factory=list)
    notifications: NotificationPanel


class ManagerDashboard(DashboardBase):
    role: Literal["property_manager"] = "property_manager"
    primary_action: CallToAction
    recent_requests: RequestPanel
    properties: PropertyPanel
    analytics: Optional[AnalyticsData] = None


class TenantDashboard(DashboardBase):
    role: Literal["tenant"] = "tenant"
    primary_action: CallToAction
    property: Optional[PropertyItem] = None
    property_empty_state: Optional[EmptyState] = None
    service_requests: RequestPanel
    lease_end_date: Optional[date] = None
    next_rent_due: date


class ProviderDashboard(DashboardBase):
    role: Literal["service_provider"] = "service_provider"
    availability: str
    work_orders: RequestPanel


DashboardResponse = Annotated[
    Union[ManagerDashboard, TenantDashboard, ProviderDashboard],
    Field(discriminator="role"),
]


# =============================================================================
# LIST VIEWS
# =============================================================================

class RequestListResponse(ResponseBase):
    """Service requests (any role) or work orders (providers)."""
    title: str
    stats: List[StatCard] = Field(default_factory=list)
    counts: Dict[str, int] = Field(default_factory=dict, description="Count per status over the unfiltered list")
    priority_counts: Dict[str, int] = Field(
        default_factory=dict,
        description="Count per priority over the unfiltered list",
    )
    items: List[ServiceRequestItem] = Field(default_factory=list)
    total: int = Field(..., description="Size of the unfiltered list")
    empty_state: Optional[EmptyState] = None
    primary_action: Optional[CallToAction] = None


class PropertyListResponse(ResponseBase):
    counts: Dict[str, int] = Field(default_factory=dict)
    items: List[PropertyItem] = Field(default_factory=list)
    total: int
    empty_state: Optional[EmptyState] = None
    primary_action: CallToAction


class TenantListResponse(ResponseBase):
    stats: List[StatCard] = Field(default_factory=list)
    items: List[TenantItem] = Field(default_factory=list)
    total: int
    empty_state: Optional[EmptyState] = None


class DocumentListResponse(ResponseBase):
    items: List[DocumentItem] = Field(default_factory=list)
    total: int
    empty_state: Optional[EmptyState] = None


class NotificationListResponse(ResponseBase):
    items: List[NotificationItem] = Field(default_factory=list)
    total: int
    unread_count: int
    counts_by_type: Dict[str, int] = Field(default_factory=dict)
    empty_state: Optional[EmptyState] = None


class InvoiceListResponse(ResponseBase):
    stats: List[StatCard] = Field(default_factory=list)
    counts: Dict[str, int] = Field(default_factory=dict, description="Invoices per status")
    items: List[InvoiceItem] = Field(default_factory=list)
    total: int
    empty_state: Optional[EmptyState] = None
    primary_action: CallToAction


# =============================================================================
# DETAIL
# =============================================================================

class ServiceRequestDetailResponse(ResponseBase):
    """Service-request detail/action panel."""
    request: ServiceRequestItem
    description: str
    images: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    estimated_cost_display: Optional[str] = None
    actual_cost: Optional[Money] = None
    actual_cost_display: Optional[str] = None
    created_display: str = Field(..., description="e.g. 'Oct 20, 2024, 02:30 PM'")
    completed_display: Optional[str] = None
    property: Optional[Property] = None
    tenant: Optional[Tenant] = None
    provider: Optional[ServiceProvider] = None
    available_providers: List[ServiceProvider] = Field(
        default_factory=list,
        description="Providers a manager can assign (pending requests only)",
    )


class PropertyDetailResponse(ResponseBase):
    """Manager's property page: overview cards, tenant, requests and documents."""
    property: PropertyItem
    description: str = ""
    units: Optional[int] = None
    stats: List[StatCard] = Field(default_factory=list)
    annual_revenue_display: str
    price_per_sqft_display: str
    added_display: str
    tenant: Optional[TenantItem] = None
    tenant_empty_state: Optional[EmptyState] = None
    service_requests: RequestPanel
    documents: List[DocumentItem] = Field(default_factory=list)
    documents_empty_state: Optional[EmptyState] = None


class TenantDetailResponse(ResponseBase):
    """Manager's tenant page: lease summary, property and request history."""
    tenant: TenantItem
    emergency_contact: Optional[EmergencyContact] = None
    stats: List[StatCard] = Field(default_factory=list)
    lease_start_date: date
    lease_start_display: str
    lease_duration_months: int
    months_as_tenant: int
    annual_revenue_display: str
    security_deposit_display: str
    total_paid_display: str = Field(..., description="Whole months since lease start times rent")
    property: Optional[PropertyItem] = None
    property_empty_state: Optional[EmptyState] = None
    service_requests: RequestPanel
    documents: List[DocumentItem] = Field(default_factory=list)


# =============================================================================
# AUTH
# =============================================================================

class LoginRequest(ResponseBase):
    email: str
    password: Optional[str] = Field(None, description="Accepted but not checked")


class SessionResponse(ResponseBase):
    session_token: str
    expires_at: datetime
    user: User
    dashboard_path: str = "/dashboard"


class MeResponse(ResponseBase):
    user: User
    data: UserData


class OperationResult(ResponseBase):
    success: bool
    message: str


# =============================================================================
# ACTIONS
# =============================================================================

class ServiceRequestCreate(ResponseBase):
    """Tenant submission form."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: ServiceCategory
    priority: ServiceRequestPriority = ServiceRequestPriority.MEDIUM
    images: List[str] = Field(default_factory=list)


class TransitionRequest(ResponseBase):
    target_status: ServiceRequestStatus
    note: Optional[str] = None
    actual_cost: Optional[Decimal] = Field(None, ge=0)


class AssignRequest(ResponseBase):
    provider_id: str
    estimated_cost: Optional[Decimal] = Field(None, ge=0)


class CancelRequest(ResponseBase):
    note: Optional[str] = None


class NoteRequest(ResponseBase):
    note: str


class ActionResult(ResponseBase):
    success: bool
    message: str
    previous_status: ServiceRequestStatus
    service_request: ServiceRequestItem


class MarkAllReadResult(ResponseBase):
    updated: int
    unread_count: int
