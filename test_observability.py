"""
Observability Validation Test

This test validates the observability stack:
1. Metrics collection works (session/service-request/timing metrics)
2. Structured logging with correlation IDs works
3. Correlation IDs bound during a request reach every log line

Pass criteria: from one service request ID you can find every log line
that touched it.
"""

import contextvars
import json
import logging

import pytest


def test_observability_imports():
    """Verify all observability modules import correctly."""
    from core.observability import (
        MetricsCollector, get_metrics,
        get_logger, configure_logging, CorrelationContext,
        with_correlation, bind_correlation,
    )
    assert MetricsCollector is not None
    assert get_metrics is not None
    assert CorrelationContext is not None
    assert with_correlation is not None


class TestMetricsCollector:
    """Test the metrics collection system."""

    @pytest.fixture(autouse=True)
    def fresh_metrics(self):
        from core.observability.metrics import MetricsCollector
        MetricsCollector.instance().reset()
        yield
        MetricsCollector.instance().reset()

    def test_singleton_instance(self):
        """MetricsCollector returns same instance."""
        from core.observability.metrics import MetricsCollector
        m1 = MetricsCollector.instance()
        m2 = MetricsCollector.instance()
        assert m1 is m2

    def test_session_metrics(self):
        """Logins, failures and switches are counted; roles are tallied."""
        from core.observability.metrics import get_metrics
        mc = get_metrics()

        mc.record_login("tenant")
        mc.record_login("tenant")
        mc.record_failed_login()
        mc.record_switch("service_provider")

        sessions = mc.get_summary()["sessions"]
        assert sessions["logins"] == 2
        assert sessions["failed_logins"] == 1
        assert sessions["switches"] == 1
        assert sessions["by_role"] == {"tenant": 2, "service_provider": 1}

    def test_service_request_metrics(self):
        """Transitions are counted per target status."""
        from core.observability.metrics import get_metrics
        mc = get_metrics()

        mc.record_submission()
        mc.record_transition("in_progress")
        mc.record_transition("completed")
        mc.record_transition("in_progress")
        mc.record_rejected_transition()

        summary = mc.get_summary()["service_requests"]
        assert summary["submitted"] == 1
        assert summary["transitions"] == 3
        assert summary["rejected"] == 1
        assert summary["by_target"] == {"in_progress": 2, "completed": 1}

    def test_timing_metrics(self):
        """Average and p95 are computed per route."""
        from core.observability.metrics import get_metrics
        mc = get_metrics()

        for duration in [10.0, 20.0, 30.0, 40.0]:
            mc.record_request_time("GET /dashboard", duration)

        timing = mc.get_summary()["timings"]["GET /dashboard"]
        assert timing["average_ms"] == 25.0
        assert timing["p95_ms"] == 40.0
        assert timing["sample_count"] == 4

    def test_timing_samples_are_bounded(self):
        """Old samples are dropped once the per-route cap is reached."""
        from core.observability.metrics import TimingMetrics
        timings = TimingMetrics(max_samples=3)
        for duration in [1.0, 2.0, 3.0, 4.0, 5.0]:
            timings.add_sample("GET /health", duration)

        assert timings.by_route["GET /health"] == [3.0, 4.0, 5.0]
        assert timings.get_average("GET /missing") == 0.0
        assert timings.get_p95("GET /missing") == 0.0

    def test_reset(self):
        from core.observability.metrics import get_metrics
        mc = get_metrics()
        mc.record_login("property_manager")
        mc.reset()
        assert mc.get_summary()["sessions"]["logins"] == 0


class TestCorrelationContext:
    """Test correlation ID propagation."""

    def test_context_to_dict_drops_none(self):
        from core.observability.logging import CorrelationContext
        ctx = CorrelationContext(request_id="req-1", user_id="2")
        assert ctx.to_dict() == {"request_id": "req-1", "user_id": "2"}

    def test_merge_keeps_existing_values(self):
        from core.observability.logging import CorrelationContext
        ctx = CorrelationContext(request_id="req-1")
        merged = ctx.merge(service_request_id="4", user_id=None)

        assert merged.request_id == "req-1"
        assert merged.service_request_id == "4"
        assert merged.user_id is None
        assert ctx.service_request_id is None

    def test_with_correlation_is_scoped(self):
        """Nested scopes add IDs and restore the outer context on exit."""
        from core.observability.logging import get_correlation_context, with_correlation

        with with_correlation(request_id="req-1"):
            with with_correlation(service_request_id="1"):
                inner = get_correlation_context()
                assert inner.request_id == "req-1"
                assert inner.service_request_id == "1"
            assert get_correlation_context().service_request_id is None
        assert get_correlation_context().request_id is None

    def test_bind_correlation_persists_in_context(self):
        """bind_correlation lasts until the surrounding context ends."""
        from core.observability.logging import bind_correlation, get_correlation_context

        def handle():
            bind_correlation(user_id="3", role="service_provider")
            return get_correlation_context()

        bound = contextvars.copy_context().run(handle)
        assert bound.user_id == "3"
        assert bound.role == "service_provider"
        assert get_correlation_context().user_id is None


class TestStructuredLogging:
    """Formatters include correlation IDs and per-call extra fields."""

    def make_record(self, message, **extra_fields):
        record = logging.LogRecord("api.services.store", logging.INFO, __file__, 1, message, (), None)
        record.extra_fields = extra_fields
        return record

    def test_json_formatter(self):
        from core.observability.logging import StructuredFormatter, with_correlation

        record = self.make_record("Service request 1 moved to in_progress", from_status="assigned")
        with with_correlation(request_id="req-1", user_id="3", service_request_id="1"):
            data = json.loads(StructuredFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "api.services.store"
        assert data["message"] == "Service request 1 moved to in_progress"
        assert data["request_id"] == "req-1"
        assert data["user_id"] == "3"
        assert data["service_request_id"] == "1"
        assert data["from_status"] == "assigned"
        assert data["timestamp"].endswith("Z")

    def test_human_formatter(self):
        from core.observability.logging import HumanReadableFormatter, with_correlation

        record = self.make_record("Dashboard built", stat_cards=4)
        with with_correlation(request_id="0123456789abcdef", user_id="1", service_request_id="2"):
            line = HumanReadableFormatter().format(record)

        assert "[req:01234567/user:1/sr:2]" in line
        assert line.endswith("Dashboard built stat_cards=4")

    def test_human_formatter_without_context(self):
        from core.observability.logging import HumanReadableFormatter

        line = HumanReadableFormatter().format(self.make_record("Startup"))
        assert "[-]: Startup" in line

    def test_correlated_logger_passes_extra_fields(self, caplog):
        from core.observability.logging import get_logger

        logger = get_logger("lifecycle.test")
        with caplog.at_level(logging.INFO, logger="lifecycle.test"):
            logger.info("Provider accepted job", extra_fields={"service_request_id": "1"})

        [record] = [r for r in caplog.records if r.name == "lifecycle.test"]
        assert record.getMessage() == "Provider accepted job"
        assert record.extra_fields == {"service_request_id": "1"}

    def test_logger_is_cached(self):
        from core.observability.logging import get_logger
        assert get_logger("api.server") is get_logger("api.server")
