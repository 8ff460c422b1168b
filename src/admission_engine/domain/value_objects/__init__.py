"""Value objects for the admissions domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Identifiers:
        - ApplicantId: Type-safe applicant identifier
        - SpecialityId: Type-safe speciality identifier

    Query Results:
        - ScoredApplicant: Applicant id with summed exam score
        - SpecialityCount: Speciality id with an application count
        - ExamMaxScore: Exam name with its best result
        - TopPerformerChoice: Application row of a best-scoring applicant
        - FavoriteSpeciality: (applicant_id, speciality_id) pair
"""

from admission_engine.domain.value_objects.identifiers import ApplicantId, SpecialityId
from admission_engine.domain.value_objects.results import (
    ExamMaxScore,
    FavoriteSpeciality,
    ScoredApplicant,
    SpecialityCount,
    TopPerformerChoice,
)

__all__ = [
    # Identifiers
    "ApplicantId",
    "SpecialityId",
    # Query results
    "ScoredApplicant",
    "SpecialityCount",
    "ExamMaxScore",
    "TopPerformerChoice",
    "FavoriteSpeciality",
]
