"""Admission Query Service - entry point for a query session.

The service owns the current DataStore snapshot and runs the analytical
queries against it, adding logging, tracing and metrics around each
call.

Usage:
    from admission_engine.application import AdmissionQueryService

    service = AdmissionQueryService()
    service.load(DataStore(applicants, applications, specialities, exam_results))

    service.applicants_by_city("Vladivostok")
    service.top_rated_applicants()

Snapshots:
    load() replaces the snapshot atomically. Every query takes the
    snapshot once when it starts, so a query in flight keeps reading the
    snapshot it started with even if a new one is loaded meanwhile.
"""

from __future__ import annotations

import threading
import time
from datetime import date
from typing import Any, Callable, Sequence

from admission_engine.application import queries
from admission_engine.domain.services import DataStore
from admission_engine.domain.value_objects import (
    ApplicantId,
    ExamMaxScore,
    FavoriteSpeciality,
    ScoredApplicant,
    SpecialityCount,
    TopPerformerChoice,
)
from admission_engine.infrastructure.config import Config, get_config
from admission_engine.infrastructure.logging import get_logger, query_context, setup_logging
from admission_engine.infrastructure.metrics import MetricsRegistry, setup_metrics
from admission_engine.infrastructure.tracing import query_span, setup_tracing

logger = get_logger(__name__)


class NoSnapshotError(RuntimeError):
    """Raised when a query runs before any DataStore was loaded."""

    pass


class AdmissionQueryService:
    """Runs the analytical queries against the current DataStore snapshot.

    Query parameters left as None fall back to the values in
    ``Config.query``.

    Thread Safety:
        Queries may run concurrently from several threads. Loading a new
        snapshot is atomic with respect to queries.
    """

    def __init__(
        self,
        store: DataStore | None = None,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Initial snapshot. Queries fail until one is loaded.
            config: Configuration. Uses the global config if None.
            metrics: Metrics registry. Metrics are not recorded if None.
        """
        self._config = config or get_config()
        self._metrics = metrics
        self._lock = threading.Lock()
        self._store: DataStore | None = None

        if store is not None:
            self.load(store)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def has_snapshot(self) -> bool:
        """Check if a snapshot has been loaded."""
        with self._lock:
            return self._store is not None

    def load(self, store: DataStore) -> DataStore | None:
        """Replace the current snapshot.

        Args:
            store: The new snapshot.

        Returns:
            The snapshot that was replaced, or None for the first load.
        """
        with self._lock:
            previous, self._store = self._store, store

        counts = store.counts()
        if self._metrics is not None:
            self._metrics.snapshot_swaps_total.inc()
            for dataset, size in counts.items():
                self._metrics.datastore_records.labels(dataset=dataset).set(size)

        logger.info("snapshot_loaded", replaced=previous is not None, **counts)
        return previous

    def snapshot(self) -> DataStore:
        """Return the current snapshot.

        Raises:
            NoSnapshotError: If nothing has been loaded yet.
        """
        with self._lock:
            store = self._store
        if store is None:
            raise NoSnapshotError("No DataStore snapshot has been loaded")
        return store

    def applicants_by_city(self, city: str) -> list[ApplicantId]:
        """Ids of applicants from ``city``."""
        return self._run("applicants_by_city", queries.applicants_by_city, city)

    def older_applicants(
        self, years: int | None = None, as_of: date | None = None
    ) -> list[ApplicantId]:
        """Ids of applicants older than ``years`` at ``as_of``, by full name."""
        if years is None:
            years = self._config.query.age_threshold_years
        if as_of is None:
            as_of = self._config.as_of()
        return self._run("older_applicants", queries.older_applicants, years, as_of)

    def select_by_speciality(self, name: str) -> list[str]:
        """Names of applicants to speciality ``name``, best total score first."""
        return self._run("select_by_speciality", queries.select_by_speciality, name)

    def count_applications_by_speciality(
        self, priority: int | None = None
    ) -> list[SpecialityCount]:
        return self._run(
            "count_applications_by_speciality",
            queries.count_applications_by_speciality,
            self._priority(priority),
        )

    def first_priority_speciality_counts(self, priority: int | None = None) -> list[int]:
        """Application counts per speciality at the first-choice priority."""
        return self._run(
            "first_priority_speciality_counts",
            queries.first_priority_speciality_counts,
            self._priority(priority),
        )

    def rank_applicants(self) -> list[ScoredApplicant]:
        return self._run("rank_applicants", queries.rank_applicants)

    def top_rated_applicants(self, k: int | None = None) -> list[ApplicantId]:
        """Ids of the ``k`` applicants with the highest total score."""
        if k is None:
            k = self._config.query.top_rated_limit
        return self._run("top_rated_applicants", queries.top_rated_applicants, k)

    def max_score_by_exam(self) -> list[ExamMaxScore]:
        return self._run("max_score_by_exam", queries.max_score_by_exam)

    def top_performer_choices(self, priority: int | None = None) -> list[TopPerformerChoice]:
        return self._run(
            "top_performer_choices",
            queries.top_performer_choices,
            self._priority(priority),
        )

    def favorite_specialities_of_top_performers(self) -> list[FavoriteSpeciality]:
        """First-choice specialities of each exam's best scorer."""
        return self._run(
            "favorite_specialities_of_top_performers",
            queries.favorite_specialities_of_top_performers,
        )

    def _priority(self, priority: int | None) -> int:
        return self._config.query.priority if priority is None else priority

    def _run(self, name: str, query: Callable[..., Sequence[Any]], *args: Any) -> Any:
        """Execute one query against a single snapshot, with instrumentation."""
        store = self.snapshot()
        counts = store.counts()

        with query_context(name, counts), query_span(name, counts) as span:
            start = time.perf_counter()
            try:
                result = query(store, *args)
            except Exception:
                if self._metrics is not None:
                    self._metrics.queries_total.labels(query=name, status="error").inc()
                logger.exception("query_failed")
                raise
            elapsed = time.perf_counter() - start
            span.set_attribute("admission.rows", len(result))

            logger.debug(
                "query_executed",
                rows=len(result),
                duration_ms=round(elapsed * 1000, 3),
            )

        if self._metrics is not None:
            self._metrics.queries_total.labels(query=name, status="success").inc()
            self._metrics.query_latency_seconds.labels(query=name).observe(elapsed)
            self._metrics.query_result_rows.labels(query=name).observe(len(result))

        return result


def bootstrap(config: Config | None = None) -> AdmissionQueryService:
    """Create a service with logging, tracing and metrics configured from ``config``.

    Args:
        config: Configuration. Uses the global config if None.

    Returns:
        A service without a snapshot; call load() before querying.
    """
    config = config or get_config()
    observability = config.observability

    setup_logging(level=observability.log_level, log_format=observability.log_format)
    if observability.otel_endpoint:
        setup_tracing(
            service_name=observability.otel_service_name,
            otlp_endpoint=observability.otel_endpoint,
        )

    metrics = setup_metrics(port=observability.metrics_port) if observability.metrics_enabled else None

    logger.info(
        "admission_engine_initialized",
        metrics_enabled=observability.metrics_enabled,
        tracing_enabled=observability.otel_endpoint is not None,
    )
    return AdmissionQueryService(config=config, metrics=metrics)
