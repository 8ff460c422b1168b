"""Pytest configuration and fixtures for admission_engine tests."""

from __future__ import annotations

from datetime import date

import pytest
from prometheus_client import CollectorRegistry

from admission_engine.domain.entities import Applicant, Application, ExamResult, Speciality
from admission_engine.domain.services import DataStore
from admission_engine.domain.value_objects import ApplicantId, SpecialityId
from admission_engine.infrastructure.config import Config, QueryConfig
from admission_engine.infrastructure.metrics import MetricsRegistry


def _applicant(id: int, full_name: str, city: str, birthday: date) -> Applicant:
    return Applicant(ApplicantId(id), full_name, city, birthday)


def _application(applicant_id: int, speciality_id: int, priority: int) -> Application:
    return Application(ApplicantId(applicant_id), SpecialityId(speciality_id), priority)


def _result(applicant_id: int, exam_name: str, result: float) -> ExamResult:
    return ExamResult(ApplicantId(applicant_id), exam_name, result)


APPLICANTS = [
    _applicant(1, "Aleksandr Ivanov", "Moscow", date(2001, 3, 15)),
    _applicant(2, "Anna Lebedeva", "Vladivostok", date(2004, 10, 10)),
    _applicant(3, "Ekaterina Popova", "Khabarovsk", date(2004, 10, 9)),
    _applicant(4, "Mikhail Volkov", "Moscow", date(2000, 2, 29)),
    _applicant(5, "Boris Smirnov", "Novosibirsk", date(1999, 7, 22)),
    _applicant(6, "Veronika Igorevna", "Vladivostok", date(2005, 6, 18)),
    _applicant(7, "Dmitry Kuznetsov", "Samara", date(2003, 12, 1)),
    _applicant(8, "Irina Sokolova", "Khabarovsk", date(2002, 5, 30)),
    _applicant(9, "Pavel Morozov", "Vladivostok", date(2006, 1, 25)),
]

SPECIALITIES = [
    Speciality(SpecialityId(0), "Computer Science"),
    Speciality(SpecialityId(1), "Philosophy"),
    Speciality(SpecialityId(2), "Mathematics"),
    Speciality(SpecialityId(3), "Physics"),
    Speciality(SpecialityId(4), "History"),
    Speciality(SpecialityId(5), "Linguistics"),
    Speciality(SpecialityId(6), "Chemistry"),
    Speciality(SpecialityId(7), "Biology"),
    Speciality(SpecialityId(8), "Economics"),
]

APPLICATIONS = [
    _application(1, 0, 1),
    _application(1, 2, 2),
    _application(2, 3, 1),
    _application(2, 0, 2),
    _application(3, 0, 1),
    _application(3, 2, 2),
    _application(3, 5, 3),
    _application(4, 8, 1),
    _application(4, 3, 2),
    _application(5, 8, 1),
    _application(6, 1, 1),
    _application(7, 0, 1),
    _application(8, 4, 2),
    _application(9, 6, 2),
    _application(9, 7, 3),
]

# Totals: 3=290, 9=270, 7=260, 5=250, 1=240, 4=240, 8=210, 2=200, 6=0
EXAM_RESULTS = [
    _result(1, "Mathematics", 80),
    _result(1, "Russian", 85),
    _result(1, "Informatics", 75),
    _result(2, "Mathematics", 70),
    _result(2, "Russian", 65),
    _result(2, "Physics", 65),
    _result(3, "Mathematics", 98),
    _result(3, "Russian", 97),
    _result(3, "Informatics", 95),
    _result(4, "Mathematics", 60),
    _result(4, "Russian", 80),
    _result(4, "Physics", 100),
    _result(5, "Mathematics", 85),
    _result(5, "Russian", 90),
    _result(5, "Informatics", 75),
    _result(7, "Mathematics", 90),
    _result(7, "Russian", 80),
    _result(7, "Physics", 90),
    _result(8, "Mathematics", 70),
    _result(8, "Russian", 70),
    _result(8, "Informatics", 70),
    _result(9, "Mathematics", 95),
    _result(9, "Russian", 90),
    _result(9, "Informatics", 85),
]


@pytest.fixture
def admissions_store() -> DataStore:
    """Provide the admissions committee dataset."""
    return DataStore(
        applicants=APPLICANTS,
        applications=APPLICATIONS,
        specialities=SPECIALITIES,
        exam_results=EXAM_RESULTS,
    )


@pytest.fixture
def test_config() -> Config:
    """Provide a configuration with a fixed reference date."""
    return Config(query=QueryConfig(reference_date=date(2024, 10, 10)))


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
