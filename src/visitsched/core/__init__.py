"""Core utilities shared across visitsched modules."""

from .errors import MissingInputError, PrintRejectedError, ProtocolConfigError, VisitSchedValueError

__all__ = [
    "VisitSchedValueError",
    "MissingInputError",
    "PrintRejectedError",
    "ProtocolConfigError",
]
