"""Domain entities for the admissions engine.

Entities are immutable once loaded; the engine neither creates nor
destroys records.

Exports:
    - Applicant: A person under evaluation for admission
    - Application: Ranked request of an applicant for a speciality
    - Speciality: An admission track
    - ExamResult: One scored exam performance
"""

from admission_engine.domain.entities.applicant import Applicant
from admission_engine.domain.entities.application import Application
from admission_engine.domain.entities.exam_result import ExamResult
from admission_engine.domain.entities.speciality import Speciality

__all__ = [
    "Applicant",
    "Application",
    "Speciality",
    "ExamResult",
]
