"""ExamResult entity - one scored exam performance of an applicant."""

from __future__ import annotations

from dataclasses import dataclass

from admission_engine.domain.errors import InvalidInputError
from admission_engine.domain.value_objects import ApplicantId


@dataclass(frozen=True, slots=True)
class ExamResult:
    """A single exam score.

    An applicant may have any number of results, including several for
    the same exam; all of them count towards the applicant's total.

    Attributes:
        applicant_id: Applicant who sat the exam
        exam_name: Name of the exam
        result: Non-negative score
    """

    applicant_id: ApplicantId
    exam_name: str
    result: float

    def __post_init__(self) -> None:
        """Validate the score."""
        if isinstance(self.result, bool) or not isinstance(self.result, (int, float)):
            raise InvalidInputError(
                f"result must be a number, got {type(self.result).__name__}"
            )
        if self.result < 0:
            raise InvalidInputError(f"result must be non-negative, got {self.result}")
