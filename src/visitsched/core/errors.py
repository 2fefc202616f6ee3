"""Common visitsched-specific exceptions."""


class VisitSchedValueError(ValueError):
    """Raised when visitsched detects invalid user-provided data."""


class MissingInputError(VisitSchedValueError):
    """Raised when a required form field is blank."""


class PrintRejectedError(VisitSchedValueError):
    """Raised when printing is requested before a schedule table exists."""


class ProtocolConfigError(VisitSchedValueError):
    """Raised when a protocol configuration file cannot be validated."""


__all__ = [
    "VisitSchedValueError",
    "MissingInputError",
    "PrintRejectedError",
    "ProtocolConfigError",
]
