"""Infrastructure layer - cross-cutting concerns."""

from admission_engine.infrastructure.config import Config, get_config
from admission_engine.infrastructure.logging import setup_logging, get_logger, query_context
from admission_engine.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from admission_engine.infrastructure.tracing import setup_tracing, get_tracer, query_span, trace_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "query_context",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "query_span",
]
