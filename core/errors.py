"""Domain errors raised by the lifecycle engine and the in-memory store.

The API layer translates these into HTTP responses; nothing below the
route handlers raises ``HTTPException`` directly.
"""

from typing import Optional


class PortalError(Exception):
    """Base class for all portal errors."""

    def __init__(self, message: str, entity_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.entity_id = entity_id


class NotFoundError(PortalError):
    """A referenced entity does not exist."""


class AccessDeniedError(PortalError):
    """The current user's role may not perform the operation."""


class InvalidTransitionError(PortalError):
    """A status change that the service-request lifecycle does not allow."""

    def __init__(self, current: str, target: str, entity_id: Optional[str] = None):
        super().__init__(
            f"Cannot move service request from '{current}' to '{target}'",
            entity_id=entity_id,
        )
        self.current = current
        self.target = target


class ValidationError(PortalError):
    """Submitted data failed a business rule (blank note, unknown category)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
