"""
Aggregate counters over service-request lists.

Dashboards show counts per status and per priority. Counts are recomputed
on every call in a single pass; every enum value is present in the result,
zero when no request carries it.
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

from models.domain import ServiceRequest, ServiceRequestPriority, ServiceRequestStatus


@dataclass
class RequestCounters:
    """Status and priority counts for a list of requests."""
    total: int = 0
    by_status: Dict[ServiceRequestStatus, int] = field(
        default_factory=lambda: {s: 0 for s in ServiceRequestStatus}
    )
    by_priority: Dict[ServiceRequestPriority, int] = field(
        default_factory=lambda: {p: 0 for p in ServiceRequestPriority}
    )

    def status(self, status: ServiceRequestStatus) -> int:
        return self.by_status[ServiceRequestStatus(status)]

    def priority(self, priority: ServiceRequestPriority) -> int:
        return self.by_priority[ServiceRequestPriority(priority)]

    @property
    def pending(self) -> int:
        return self.status(ServiceRequestStatus.PENDING)

    @property
    def assigned(self) -> int:
        return self.status(ServiceRequestStatus.ASSIGNED)

    @property
    def in_progress(self) -> int:
        return self.status(ServiceRequestStatus.IN_PROGRESS)

    @property
    def completed(self) -> int:
        return self.status(ServiceRequestStatus.COMPLETED)

    @property
    def active(self) -> int:
        """Jobs a provider is holding: assigned plus in progress."""
        return self.assigned + self.in_progress

    def status_dict(self) -> Dict[str, int]:
        return {s.value: n for s, n in self.by_status.items()}

    def priority_dict(self) -> Dict[str, int]:
        return {p.value: n for p, n in self.by_priority.items()}


def count_requests(requests: Iterable[ServiceRequest]) -> RequestCounters:
    """Count requests by status and priority in one pass."""
    requests = list(requests)
    statuses = Counter(r.status for r in requests)
    priorities = Counter(r.priority for r in requests)

    counters = RequestCounters(total=len(requests))
    for status in ServiceRequestStatus:
        counters.by_status[status] = statuses.get(status, 0)
    for priority in ServiceRequestPriority:
        counters.by_priority[priority] = priorities.get(priority, 0)
    return counters


def total_earnings(completed_jobs: Iterable[ServiceRequest]) -> Decimal:
    """Sum of actual (else estimated, else zero) cost over completed jobs."""
    return sum((job.cost for job in completed_jobs), Decimal("0"))


def recent_requests(requests: Iterable[ServiceRequest], limit: int = 5) -> List[ServiceRequest]:
    """Newest requests first, by creation time."""
    return sorted(requests, key=lambda r: r.created_at, reverse=True)[:limit]
