"""Read-only snapshot of the four admission datasets.

A DataStore is built once per query session by an external loader and
never changes afterwards. Construction is the only place where the
engine rejects input: every uniqueness invariant is checked up front so
that queries never have to.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from admission_engine.domain.entities import Applicant, Application, ExamResult, Speciality
from admission_engine.domain.errors import InvalidInputError

logger = structlog.get_logger(__name__)


class DataStore:
    """Immutable, ordered snapshot of applicants, applications, specialities and exam results.

    Invariants enforced at construction:
        - Applicant.id is unique
        - Speciality.id is unique
        - Application.priority is unique per applicant

    Referential integrity is not checked: an application or exam result
    pointing at an unknown applicant or speciality simply never joins.

    Thread Safety:
        The snapshot is read-only, so any number of queries may read it
        concurrently without locking.
    """

    __slots__ = ("_applicants", "_applications", "_specialities", "_exam_results")

    def __init__(
        self,
        applicants: Iterable[Applicant] = (),
        applications: Iterable[Application] = (),
        specialities: Iterable[Speciality] = (),
        exam_results: Iterable[ExamResult] = (),
    ) -> None:
        """Build and validate a snapshot.

        Args:
            applicants: Applicants in loader order
            applications: Applications in loader order
            specialities: Specialities in loader order
            exam_results: Exam results in loader order

        Raises:
            InvalidInputError: If a uniqueness invariant is violated.
        """
        applicants = tuple(applicants)
        applications = tuple(applications)
        specialities = tuple(specialities)
        exam_results = tuple(exam_results)

        _ensure_unique("applicants", (a.id for a in applicants), "id")
        _ensure_unique("specialities", (s.id for s in specialities), "id")
        _ensure_unique(
            "applications",
            ((a.applicant_id, a.priority) for a in applications),
            "(applicant_id, priority)",
        )

        self._applicants = applicants
        self._applications = applications
        self._specialities = specialities
        self._exam_results = exam_results

        logger.debug("data_store_loaded", **self.counts())

    @property
    def applicants(self) -> tuple[Applicant, ...]:
        return self._applicants

    @property
    def applications(self) -> tuple[Application, ...]:
        return self._applications

    @property
    def specialities(self) -> tuple[Speciality, ...]:
        return self._specialities

    @property
    def exam_results(self) -> tuple[ExamResult, ...]:
        return self._exam_results

    def counts(self) -> dict[str, int]:
        """Return the number of records per dataset."""
        return {
            "applicants": len(self._applicants),
            "applications": len(self._applications),
            "specialities": len(self._specialities),
            "exam_results": len(self._exam_results),
        }

    def __repr__(self) -> str:
        sizes = ", ".join(f"{name}={size}" for name, size in self.counts().items())
        return f"DataStore({sizes})"


def _ensure_unique(dataset: str, keys: Iterable[object], key_name: str) -> None:
    """Raise InvalidInputError on the first repeated key."""
    seen: set[object] = set()
    for key in keys:
        if key in seen:
            logger.warning("data_store_rejected", dataset=dataset, key=repr(key))
            raise InvalidInputError(f"Duplicate {key_name} {key!r} in {dataset}")
        seen.add(key)
