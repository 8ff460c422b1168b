"""Unit tests for logging, metrics and tracing helpers."""

from __future__ import annotations

import pytest
import structlog

from admission_engine.infrastructure import (
    get_logger,
    get_metrics,
    get_tracer,
    query_context,
    query_span,
    setup_tracing,
    trace_span,
)
from admission_engine.infrastructure.logging import SERVICE_NAME, add_engine_context
from admission_engine.infrastructure.metrics import MetricsRegistry
@pytest.mark.unit
class TestObservability:
    """Tests for the infrastructure helpers."""

    def test_get_logger_binds_context(self) -> None:
        logger = get_logger("admission_engine.tests", session="abc")

        assert logger is not None
        logger.debug("observability_test_event")

    def test_get_metrics_returns_same_instance(self) -> None:
        assert get_metrics() is get_metrics()

    def test_metrics_registry_is_isolated(self, metrics_registry: MetricsRegistry) -> None:
        metrics_registry.snapshot_swaps_total.inc()

        assert metrics_registry.registry.get_sample_value("admission_snapshot_swaps_total") == 1

    def test_trace_span(self) -> None:
        with trace_span("admission.test", {"query": "unit"}) as span:
            assert span is not None

    def test_get_tracer_cached(self) -> None:
        assert get_tracer() is get_tracer()

    def test_setup_tracing_returns_tracer(self) -> None:
        tracer = setup_tracing(service_name="admission_engine_test")

        assert tracer is get_tracer()

    def test_engine_context_tags_service(self) -> None:
        event = add_engine_context(None, "info", {"event": "snapshot_loaded"})

        assert event["service"] == SERVICE_NAME

    def test_engine_context_keeps_explicit_service(self) -> None:
        event = add_engine_context(None, "info", {"event": "x", "service": "other"})

        assert event["service"] == "other"

    def test_query_context_binds_and_unbinds(self) -> None:
        """Query name and snapshot sizes are bound only inside the block."""
        structlog.contextvars.clear_contextvars()

        with query_context("rank_applicants", {"applicants": 9, "exam_results": 24}):
            bound = structlog.contextvars.get_contextvars()
            assert bound["query"] == "rank_applicants"
            assert bound["snapshot_applicants"] == 9
            assert bound["snapshot_exam_results"] == 24

        assert "query" not in structlog.contextvars.get_contextvars()

    def test_query_span(self) -> None:
        with query_span("max_score_by_exam", {"exam_results": 24}) as span:
            assert span is not None
            span.set_attribute("admission.rows", 3)
