"""Schedule calculation (protocol rules, visit records, date formatting)."""

from .calculator import compute_schedule
from .formatting import MONTH_ABBREVIATIONS, format_date, format_window, parse_anchor_date
from .io import load_protocol
from .models import DEFAULT_PROTOCOL, ProtocolConfig, Schedule, VisitRecord

__all__ = [
    "ProtocolConfig",
    "VisitRecord",
    "Schedule",
    "DEFAULT_PROTOCOL",
    "compute_schedule",
    "load_protocol",
    "MONTH_ABBREVIATIONS",
    "format_date",
    "format_window",
    "parse_anchor_date",
]
