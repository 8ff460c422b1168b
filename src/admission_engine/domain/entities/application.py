"""Application entity - one applicant's ranked request for a speciality."""

from __future__ import annotations

from dataclasses import dataclass

from admission_engine.domain.errors import InvalidInputError
from admission_engine.domain.value_objects import ApplicantId, SpecialityId


@dataclass(frozen=True, slots=True)
class Application:
    """An applicant's request to be admitted to a speciality.

    Attributes:
        applicant_id: Applicant who submitted the application
        speciality_id: Requested speciality
        priority: Preference rank among the applicant's own applications
            (1 = first choice)
    """

    applicant_id: ApplicantId
    speciality_id: SpecialityId
    priority: int

    def __post_init__(self) -> None:
        """Validate the priority."""
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise InvalidInputError(
                f"priority must be an integer, got {type(self.priority).__name__}"
            )
        if self.priority < 1:
            raise InvalidInputError(f"priority must be positive, got {self.priority}")
