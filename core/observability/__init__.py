"""
Observability Module for the Property Portal

Provides:
- Structured logging with correlation IDs
- In-memory metrics (sessions, service-request lifecycle, request timings)
"""

from core.observability.metrics import (
    MetricsCollector,
    get_metrics,
)

from core.observability.logging import (
    get_logger,
    configure_logging,
    CorrelationContext,
    with_correlation,
    bind_correlation,
)

__all__ = [
    # Metrics
    "MetricsCollector",
    "get_metrics",
    # Logging
    "get_logger",
    "configure_logging",
    "CorrelationContext",
    "with_correlation",
    "bind_correlation",
]
