"""Named result structs produced by the analytical queries.

Every report returns a fixed, documented field set instead of ad-hoc
shapes. They are NamedTuples, so a result compares equal to the plain
tuple of its fields.
"""

from __future__ import annotations

from typing import NamedTuple

from admission_engine.domain.value_objects.identifiers import ApplicantId, SpecialityId


class ScoredApplicant(NamedTuple):
    """An applicant with the sum of all their exam results."""

    applicant_id: ApplicantId
    score: float


class SpecialityCount(NamedTuple):
    """Number of applications a speciality received at a given priority."""

    speciality_id: SpecialityId
    count: int


class ExamMaxScore(NamedTuple):
    """Best result achieved on an exam."""

    exam_name: str
    max_score: float


class TopPerformerChoice(NamedTuple):
    """An application made by an applicant holding the best score on an exam.

    Attributes:
        applicant_id: The top scorer
        speciality_id: Speciality the top scorer applied to
        exam_name: Exam on which the applicant achieved the best score
        max_score: The best score itself
        priority: Priority of the application
    """

    applicant_id: ApplicantId
    speciality_id: SpecialityId
    exam_name: str
    max_score: float
    priority: int


class FavoriteSpeciality(NamedTuple):
    """First-choice speciality of a top performer."""

    applicant_id: ApplicantId
    speciality_id: SpecialityId
