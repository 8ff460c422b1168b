"""Errors raised by the admissions domain."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when admission data violates a construction-time invariant.

    Covers duplicate identifiers, duplicate priorities for one applicant,
    and out-of-range field values. Data is never partially accepted.
    """

    pass
