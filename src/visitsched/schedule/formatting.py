"""Date parsing and display helpers used by the schedule renderers."""

from __future__ import annotations

import datetime as dt
import re

from visitsched.core.errors import VisitSchedValueError
from visitsched.schedule.models import VisitRecord

__all__ = ["MONTH_ABBREVIATIONS", "format_date", "format_window", "parse_anchor_date"]

# Fixed table; output must not depend on the process locale.
MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def format_date(value: dt.date) -> str:
    """Render ``value`` as ``DD-Mon-YYYY`` (e.g. ``14-Jan-2025``)."""
    return f"{value.day:02d}-{MONTH_ABBREVIATIONS[value.month - 1]}-{value.year:04d}"


def format_window(record: VisitRecord) -> str:
    return f"{format_date(record.window_start)} - {format_date(record.window_end)}"


def parse_anchor_date(value: str) -> dt.date:
    """Parse the ``YYYY-MM-DD`` value submitted by a date input."""
    text = value.strip()
    match = _ISO_DATE_RE.match(text)
    if match is None:
        raise VisitSchedValueError(f"Start date must be in YYYY-MM-DD format (got '{value}')")
    year, month, day = (int(part) for part in match.groups())
    try:
        return dt.date(year, month, day)
    except ValueError as exc:
        raise VisitSchedValueError(f"Start date '{value}' is not a valid calendar date") from exc
