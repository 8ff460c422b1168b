"""Analytical queries over an admissions DataStore.

Each query is a fixed pipeline of the eager operators in
``admission_engine.application.operators``. Queries are pure: they read
the snapshot, never modify it, and return the same sequence every time
they run against the same snapshot.

An applicant without exam results has a total score of exactly 0 and
takes part in every ranking like any other applicant.
"""

from __future__ import annotations

from datetime import date

from admission_engine.application.operators import (
    AggregateFunc,
    AggregateSpec,
    SortKey,
    distinct,
    filter_records,
    group_aggregate,
    inner_join,
    project,
    sort_records,
    top_k,
)
from admission_engine.domain.entities import Applicant, Application, ExamResult
from admission_engine.domain.services import DataStore
from admission_engine.domain.value_objects import (
    ApplicantId,
    ExamMaxScore,
    FavoriteSpeciality,
    ScoredApplicant,
    SpecialityCount,
    TopPerformerChoice,
)

FIRST_PRIORITY = 1
DEFAULT_TOP_RATED_LIMIT = 5


def total_scores(store: DataStore) -> dict[ApplicantId, float]:
    """Sum of exam results per applicant that has at least one result."""
    groups = group_aggregate(
        store.exam_results,
        lambda result: result.applicant_id,
        AggregateSpec("total", AggregateFunc.SUM, lambda result: result.result),
    )
    return {row["key"]: row["total"] for row in groups}


def applicants_by_city(store: DataStore, city: str) -> list[ApplicantId]:
    """Ids of applicants from ``city``, in input order."""
    from_city = filter_records(store.applicants, lambda applicant: applicant.city == city)
    return project(from_city, lambda applicant: applicant.id)


def older_applicants(store: DataStore, years: int, as_of: date) -> list[ApplicantId]:
    """Ids of applicants who turned ``years`` strictly before ``as_of``.

    Ordered by full name (ordinal string comparison); applicants with the
    same name keep input order.
    """
    older = filter_records(
        store.applicants,
        lambda applicant: applicant.birthday_after(years) < as_of,
    )
    by_name = sort_records(older, SortKey(lambda applicant: applicant.full_name))
    return project(by_name, lambda applicant: applicant.id)


def select_by_speciality(store: DataStore, name: str) -> list[str]:
    """Full names of applicants to the speciality called ``name``.

    Names are ordered by the applicant's total exam score, best first,
    and each name is listed once.
    """
    scores = total_scores(store)
    specialities = filter_records(store.specialities, lambda speciality: speciality.name == name)
    applications = inner_join(
        specialities,
        store.applications,
        lambda speciality: speciality.id,
        lambda application: application.speciality_id,
    )
    applicants = inner_join(
        applications,
        store.applicants,
        lambda pair: pair[1].applicant_id,
        lambda applicant: applicant.id,
    )

    def scored(joined: tuple[tuple, Applicant]) -> tuple[Applicant, float]:
        applicant = joined[1]
        return applicant, scores.get(applicant.id, 0)

    ranked = sort_records(
        project(applicants, scored),
        SortKey(lambda entry: entry[1], descending=True),
    )
    return distinct(project(ranked, lambda entry: entry[0].full_name))


def count_applications_by_speciality(
    store: DataStore, priority: int = FIRST_PRIORITY
) -> list[SpecialityCount]:
    """Number of applications per speciality at ``priority``.

    Specialities are listed in the order they first appear among the
    matching applications.
    """
    matching = filter_records(
        store.applications, lambda application: application.priority == priority
    )
    groups = group_aggregate(
        matching,
        lambda application: application.speciality_id,
        AggregateSpec("count", AggregateFunc.COUNT),
    )
    return project(groups, lambda row: SpecialityCount(row["key"], row["count"]))


def first_priority_speciality_counts(
    store: DataStore, priority: int = FIRST_PRIORITY
) -> list[int]:
    """Bare counts of count_applications_by_speciality."""
    return project(count_applications_by_speciality(store, priority), lambda entry: entry.count)


def rank_applicants(store: DataStore) -> list[ScoredApplicant]:
    """Every applicant with their total score, best first.

    Applicants with equal scores keep input order.
    """
    scores = total_scores(store)
    scored = project(
        store.applicants,
        lambda applicant: ScoredApplicant(applicant.id, scores.get(applicant.id, 0)),
    )
    return sort_records(scored, SortKey(lambda entry: entry.score, descending=True))


def top_rated_applicants(store: DataStore, k: int = DEFAULT_TOP_RATED_LIMIT) -> list[ApplicantId]:
    """Ids of the ``k`` best applicants by total score."""
    return project(top_k(rank_applicants(store), k), lambda entry: entry.applicant_id)


def max_score_by_exam(store: DataStore) -> list[ExamMaxScore]:
    """Best result of every exam, in order of the exam's first appearance."""
    groups = group_aggregate(
        store.exam_results,
        lambda result: result.exam_name,
        AggregateSpec("max_score", AggregateFunc.MAX, lambda result: result.result),
    )
    return project(groups, lambda row: ExamMaxScore(row["key"], row["max_score"]))


def top_performer_choices(
    store: DataStore, priority: int = FIRST_PRIORITY
) -> list[TopPerformerChoice]:
    """Applications at ``priority`` made by the best scorer of each exam.

    Every applicant sharing an exam's best score contributes rows. Output
    follows join order: exams in first-appearance order, then the
    achieving results in input order, then the applicant's applications
    in input order.
    """
    best_results = inner_join(
        max_score_by_exam(store),
        store.exam_results,
        lambda best: (best.exam_name, best.max_score),
        lambda result: (result.exam_name, result.result),
    )
    with_applicant = inner_join(
        best_results,
        store.applicants,
        lambda pair: pair[1].applicant_id,
        lambda applicant: applicant.id,
    )
    with_application = inner_join(
        with_applicant,
        store.applications,
        lambda pair: pair[1].id,
        lambda application: application.applicant_id,
    )

    def to_choice(
        joined: tuple[tuple[tuple[ExamMaxScore, ExamResult], Applicant], Application],
    ) -> TopPerformerChoice:
        ((best, _), applicant), application = joined
        return TopPerformerChoice(
            applicant_id=applicant.id,
            speciality_id=application.speciality_id,
            exam_name=best.exam_name,
            max_score=best.max_score,
            priority=application.priority,
        )

    choices = project(with_application, to_choice)
    return filter_records(choices, lambda choice: choice.priority == priority)


def favorite_specialities_of_top_performers(store: DataStore) -> list[FavoriteSpeciality]:
    """(applicant_id, speciality_id) of each top scorer's first-choice application."""
    return project(
        top_performer_choices(store, FIRST_PRIORITY),
        lambda choice: FavoriteSpeciality(choice.applicant_id, choice.speciality_id),
    )
