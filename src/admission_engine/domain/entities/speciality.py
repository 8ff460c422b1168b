"""Speciality entity - an admission track with its own ranking pool."""

from __future__ import annotations

from dataclasses import dataclass

from admission_engine.domain.value_objects import SpecialityId


@dataclass(frozen=True, slots=True)
class Speciality:
    """An admission track (programme).

    Attributes:
        id: Unique speciality identifier
        name: Human-readable name, used for lookups
    """

    id: SpecialityId
    name: str
