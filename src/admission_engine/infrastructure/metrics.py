"""Prometheus metrics for the admissions engine."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all admissions engine metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Query metrics
        self.queries_total = Counter(
            "admission_queries_total",
            "Total number of analytical queries executed",
            ["query", "status"],  # status: success, error
            registry=self._registry,
        )

        self.query_latency_seconds = Histogram(
            "admission_query_latency_seconds",
            "Query latency in seconds",
            ["query"],
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.query_result_rows = Histogram(
            "admission_query_result_rows",
            "Number of rows returned by a query",
            ["query"],
            buckets=(0, 1, 5, 10, 50, 100, 500, 1000, 10000),
            registry=self._registry,
        )

        # Snapshot metrics
        self.datastore_records = Gauge(
            "admission_datastore_records",
            "Records in the current DataStore snapshot",
            ["dataset"],  # applicants, applications, specialities, exam_results
            registry=self._registry,
        )

        self.snapshot_swaps_total = Counter(
            "admission_snapshot_swaps_total",
            "Total number of DataStore snapshots loaded",
            registry=self._registry,
        )

        # Service info
        self.info = Info(
            "admission_engine",
            "Admissions engine information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry the metrics are bound to."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from admission_engine import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
