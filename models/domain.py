"""
Domain Models for the Property Portal.

Pydantic models for the entities the dashboards render: users (one variant
per role), properties, service requests, documents, notifications and the
manager analytics block.

Hierarchy:
- User: discriminated union on ``role`` (PropertyManager | Tenant | ServiceProvider)
- ServiceRequest: the only entity with a lifecycle (see ``lifecycle``)
- UserData: role-tagged data context handed to every dashboard
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, TypeAdapter, field_validator

from core.validation import is_valid_email, is_valid_phone


# Amounts are Decimal in memory and plain numbers on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# =============================================================================
# ENUMS
# =============================================================================

class UserRole(str, Enum):
    """User roles; each role gets its own dashboard and data shape."""
    PROPERTY_MANAGER = "property_manager"
    TENANT = "tenant"
    SERVICE_PROVIDER = "service_provider"


class ServiceRequestStatus(str, Enum):
    """Service request lifecycle states."""
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ServiceRequestPriority(str, Enum):
    """Service request priority, display-only."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EMERGENCY = "emergency"


class ServiceCategory(str, Enum):
    """Categories a tenant can pick when submitting a request."""
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    HVAC = "hvac"
    APPLIANCES = "appliances"
    FLOORING = "flooring"
    PAINTING = "painting"
    CLEANING = "cleaning"
    PEST_CONTROL = "pest_control"
    SECURITY = "security"
    OTHER = "other"


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    COMMERCIAL = "commercial"
    CONDO = "condo"


class PropertyStatus(str, Enum):
    OCCUPIED = "occupied"
    VACANT = "vacant"
    MAINTENANCE = "maintenance"


class ProviderAvailability(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"


class DocumentType(str, Enum):
    LEASE = "lease"
    INVOICE = "invoice"
    RECEIPT = "receipt"
    INSPECTION = "inspection"
    INSURANCE = "insurance"
    PERMIT = "permit"
    OTHER = "other"


class NotificationType(str, Enum):
    SERVICE_REQUEST = "service_request"
    PAYMENT = "payment"
    MAINTENANCE = "maintenance"
    LEASE = "lease"
    GENERAL = "general"


class InvoiceStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


# =============================================================================
# BASE MODEL
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all domain entities."""
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# USERS
# =============================================================================

class EmergencyContact(DomainModel):
    name: str
    phone: str
    relationship: str


class UserBase(DomainModel):
    """Fields shared by every role."""
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError(f"Invalid email address: {value}")
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_valid_phone(value):
            raise ValueError(f"Invalid phone number: {value}")
        return value


class PropertyManager(UserBase):
    role: Literal["property_manager"] = "property_manager"
    company_name: Optional[str] = None
    managed_properties: List[str] = Field(default_factory=list)
    is_business_manager: bool = False


class Tenant(UserBase):
    role: Literal["tenant"] = "tenant"
    property_id: str
    lease_start_date: date
    lease_end_date: date
    rent_amount: Money
    emergency_contact: Optional[EmergencyContact] = None


class ServiceProvider(UserBase):
    role: Literal["service_provider"] = "service_provider"
    company_name: str
    services: List[str] = Field(default_factory=list)
    rating: float = Field(..., ge=0, le=5)
    completed_jobs: int = Field(default=0, description="Lifetime completed job count")
    availability: ProviderAvailability = ProviderAvailability.AVAILABLE


User = Annotated[
    Union[PropertyManager, Tenant, ServiceProvider],
    Field(discriminator="role"),
]

USER_ADAPTER: TypeAdapter = TypeAdapter(User)


# =============================================================================
# PROPERTIES
# =============================================================================

class Property(DomainModel):
    id: str
    name: str
    address: str
    type: PropertyType
    units: Optional[int] = None
    size: int = Field(..., description="Floor area in square feet")
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    rent_amount: Money
    status: PropertyStatus
    manager_id: str
    tenant_id: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    description: str = ""
    created_at: datetime


# =============================================================================
# SERVICE REQUESTS
# =============================================================================

class ServiceRequest(DomainModel):
    """A maintenance ticket raised against a property."""
    id: str
    title: str
    description: str
    category: str
    priority: ServiceRequestPriority
    status: ServiceRequestStatus
    property_id: str
    tenant_id: str
    assigned_provider_id: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    estimated_cost: Optional[Money] = None
    actual_cost: Optional[Money] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
    notes: List[str] = Field(default_factory=list)

    @property
    def cost(self) -> Decimal:
        """Actual cost when known, else the estimate, else zero."""
        return self.actual_cost or self.estimated_cost or Decimal("0")


# =============================================================================
# DOCUMENTS & NOTIFICATIONS
# =============================================================================

class Document(DomainModel):
    id: str
    name: str
    type: DocumentType
    url: str
    size: int = Field(..., ge=0, description="Size in bytes")
    uploaded_by: str
    property_id: Optional[str] = None
    tenant_id: Optional[str] = None
    service_request_id: Optional[str] = None
    created_at: datetime
    tags: List[str] = Field(default_factory=list)


class Notification(DomainModel):
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool = False
    action_url: Optional[str] = None
    created_at: datetime


# =============================================================================
# ANALYTICS
# =============================================================================

class PropertyFinancials(DomainModel):
    property_id: str
    monthly_income: Money
    monthly_expenses: Money
    net_income: Money
    occupancy_rate: float
    year_to_date_income: Money
    year_to_date_expenses: Money


class RequestTrend(DomainModel):
    month: str
    count: int
    avg_resolution_time: float = Field(..., description="Average days to resolve")


class AnalyticsData(DomainModel):
    total_properties: int
    total_tenants: int
    total_service_requests: int
    monthly_revenue: Money
    occupancy_rate: float
    average_rent: Money
    maintenance_costs: Money
    property_performance: List[PropertyFinancials] = Field(default_factory=list)
    service_request_trends: List[RequestTrend] = Field(default_factory=list)


# =============================================================================
# DATA CONTEXT
# =============================================================================

class ManagerData(DomainModel):
    role: Literal["property_manager"] = "property_manager"
    user: PropertyManager
    properties: List[Property] = Field(default_factory=list)
    service_requests: List[ServiceRequest] = Field(default_factory=list)
    tenants: List[Tenant] = Field(default_factory=list)
    service_providers: List[ServiceProvider] = Field(default_factory=list)
    analytics: Optional[AnalyticsData] = None


class TenantData(DomainModel):
    role: Literal["tenant"] = "tenant"
    user: Tenant
    property: Optional[Property] = None
    service_requests: List[ServiceRequest] = Field(default_factory=list)
    documents: List[Document] = Field(default_factory=list)


class ProviderData(DomainModel):
    role: Literal["service_provider"] = "service_provider"
    user: ServiceProvider
    work_orders: List[ServiceRequest] = Field(default_factory=list)
    completed_jobs: List[ServiceRequest] = Field(default_factory=list)
    properties: List[Property] = Field(default_factory=list)


UserData = Annotated[
    Union[ManagerData, TenantData, ProviderData],
    Field(discriminator="role"),
]
