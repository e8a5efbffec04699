"""
Metrics Collection for the Property Portal

Collects and exposes in-memory metrics for:
- Sessions (logins, failed logins, user switches)
- Service requests (submitted, transitions by target status, rejected transitions)
- HTTP request timings (average, p95 per route)

Metrics live for the lifetime of the process; there is no persistence.
"""

import statistics
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Any


# =============================================================================
# Metric Data Classes
# =============================================================================

@dataclass
class SessionMetrics:
    """Metrics for the stub authentication layer."""
    logins: int = 0
    failed_logins: int = 0
    switches: int = 0
    by_role: Dict[str, int] = field(default_factory=lambda: defaultdict(int))


@dataclass
class ServiceRequestMetrics:
    """Metrics for the service-request lifecycle."""
    submitted: int = 0
    transitions: int = 0
    rejected: int = 0
    by_target: Dict[str, int] = field(default_factory=lambda: defaultdict(int))


@dataclass
class TimingMetrics:
    """Request timing samples, bounded per route."""
    max_samples: int = 1000
    by_route: Dict[str, List[float]] = field(default_factory=lambda: defaultdict(list))

    def add_sample(self, route: str, duration_ms: float):
        samples = self.by_route[route]
        samples.append(duration_ms)
        if len(samples) > self.max_samples:
            self.by_route[route] = samples[-self.max_samples:]

    def get_average(self, route: str) -> float:
        samples = self.by_route.get(route, [])
        return statistics.mean(samples) if samples else 0.0

    def get_p95(self, route: str) -> float:
        samples = self.by_route.get(route, [])
        if not samples:
            return 0.0
        sorted_samples = sorted(samples)
        idx = int(len(sorted_samples) * 0.95)
        return sorted_samples[min(idx, len(sorted_samples) - 1)]


# =============================================================================
# Metrics Collector (Singleton)
# =============================================================================

class MetricsCollector:
    """
    Thread-safe metrics collector.

    Usage:
        metrics = MetricsCollector.instance()
        metrics.record_transition("in_progress")
        metrics.record_request_time("GET /dashboard", duration_ms=12.5)
    """

    _instance: Optional["MetricsCollector"] = None
    _instance_lock = Lock()

    def __init__(self):
        self._lock = Lock()
        self.reset()

    @classmethod
    def instance(cls) -> "MetricsCollector":
        """Get singleton instance."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def reset(self):
        """Drop all collected values."""
        with self._lock:
            self.sessions = SessionMetrics()
            self.service_requests = ServiceRequestMetrics()
            self.timings = TimingMetrics()

    # =========================================================================
    # Sessions
    # =========================================================================

    def record_login(self, role: str):
        with self._lock:
            self.sessions.logins += 1
            self.sessions.by_role[role] += 1

    def record_failed_login(self):
        with self._lock:
            self.sessions.failed_logins += 1

    def record_switch(self, role: str):
        with self._lock:
            self.sessions.switches += 1
            self.sessions.by_role[role] += 1

    # =========================================================================
    # Service Requests
    # =========================================================================

    def record_submission(self):
        with self._lock:
            self.service_requests.submitted += 1

    def record_transition(self, target_status: str):
        with self._lock:
            self.service_requests.transitions += 1
            self.service_requests.by_target[target_status] += 1

    def record_rejected_transition(self):
        with self._lock:
            self.service_requests.rejected += 1

    # =========================================================================
    # Timings
    # =========================================================================

    def record_request_time(self, route: str, duration_ms: float):
        with self._lock:
            self.timings.add_sample(route, duration_ms)

    # =========================================================================
    # Summary
    # =========================================================================

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of all metrics."""
        with self._lock:
            return {
                "sessions": {
                    "logins": self.sessions.logins,
                    "failed_logins": self.sessions.failed_logins,
                    "switches": self.sessions.switches,
                    "by_role": dict(self.sessions.by_role),
                },
                "service_requests": {
                    "submitted": self.service_requests.submitted,
                    "transitions": self.service_requests.transitions,
                    "rejected": self.service_requests.rejected,
                    "by_target": dict(self.service_requests.by_target),
                },
                "timings": {
                    route: {
                        "average_ms": self.timings.get_average(route),
                        "p95_ms": self.timings.get_p95(route),
                        "sample_count": len(samples),
                    }
                    for route, samples in self.timings.by_route.items()
                },
            }


def get_metrics() -> MetricsCollector:
    """Get the global metrics collector."""
    return MetricsCollector.instance()
