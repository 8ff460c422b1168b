"""Type-safe identifiers for admission records.

Applicant and speciality identifiers are assigned externally by the
loader; the engine only compares them for equality.
"""

from __future__ import annotations

from typing import NewType


ApplicantId = NewType("ApplicantId", int)
"""Unique identifier of an applicant. Stable for the lifetime of a snapshot."""

SpecialityId = NewType("SpecialityId", int)
"""Unique identifier of a speciality (admission track)."""
