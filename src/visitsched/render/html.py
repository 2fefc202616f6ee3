"""HTML fragments for the schedule output area."""

from __future__ import annotations

import re
from html import escape

from visitsched.schedule.formatting import format_date, format_window
from visitsched.schedule.models import Schedule

__all__ = [
    "COLUMN_HEADERS",
    "has_table",
    "render_message",
    "render_schedule_html",
]

COLUMN_HEADERS: tuple[str, ...] = ("Visit Number", "Target Visit Date", "Visit Window")

_TABLE_RE = re.compile(r"<table\b", re.IGNORECASE)


def render_message(text: str) -> str:
    return f"<p>{escape(text)}</p>"


def render_schedule_html(schedule: Schedule, subject_id: str | None = None) -> str:
    """Render ``schedule`` as a heading plus a three-column table.

    The subject identifier is free text from the form, so it is escaped before it is embedded.
    """
    if subject_id:
        heading = f"Visit Schedule for Subject ID: {escape(subject_id)}"
    else:
        heading = "Visit Schedule"

    header_cells = "".join(f"<th>{name}</th>" for name in COLUMN_HEADERS)
    lines = [
        f"<h2>{heading}</h2>",
        "<table>",
        "<thead>",
        f"<tr>{header_cells}</tr>",
        "</thead>",
        "<tbody>",
    ]
    for record in schedule.records:
        lines.append(
            "<tr>"
            f"<td>{record.label}</td>"
            f"<td>{format_date(record.target_date)}</td>"
            f"<td>{format_window(record)}</td>"
            "</tr>"
        )
    lines.extend(["</tbody>", "</table>"])
    return "\n".join(lines)


def has_table(fragment: str | None) -> bool:
    """Return ``True`` when a rendered fragment contains a schedule table."""
    if not fragment:
        return False
    return _TABLE_RE.search(fragment) is not None
