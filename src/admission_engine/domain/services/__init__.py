"""Domain services for the admissions engine.

Exports:
    - DataStore: Read-only snapshot of the four admission datasets
    - InvalidInputError: Raised when a snapshot violates an invariant
"""

from admission_engine.domain.errors import InvalidInputError
from admission_engine.domain.services.data_store import DataStore

__all__ = [
    "DataStore",
    "InvalidInputError",
]
