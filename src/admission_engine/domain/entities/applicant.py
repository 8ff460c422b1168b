"""Applicant entity - a person under evaluation for admission."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from admission_engine.domain.value_objects import ApplicantId


@dataclass(frozen=True, slots=True)
class Applicant:
    """A person applying for admission.

    Attributes:
        id: Unique applicant identifier, assigned by the loader
        full_name: Applicant's full name
        city: City the applicant comes from
        birthday_date: Calendar date of birth
    """

    id: ApplicantId
    full_name: str
    city: str
    birthday_date: date

    def birthday_after(self, years: int) -> date:
        """Return the date the applicant turns ``years`` old.

        A 29 February birthday maps to 28 February when the target year
        is not a leap year.
        """
        target_year = self.birthday_date.year + years
        try:
            return self.birthday_date.replace(year=target_year)
        except ValueError:
            return self.birthday_date.replace(year=target_year, day=28)
