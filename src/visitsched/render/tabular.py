"""Tabular and JSON exports for computed schedules."""

from __future__ import annotations

import pandas as pd

from visitsched.schedule.formatting import format_date, format_window
from visitsched.schedule.models import Schedule

__all__ = ["SCHEDULE_COLUMNS", "schedule_dataframe", "summarize_schedule"]

SCHEDULE_COLUMNS = [
    "visit_number",
    "target_date",
    "window_start",
    "window_end",
    "target_label",
    "window_label",
]


def _schedule_rows(schedule: Schedule) -> list[dict[str, object]]:
    return [
        {
            "visit_number": record.visit_number,
            "target_date": record.target_date.isoformat(),
            "window_start": record.window_start.isoformat(),
            "window_end": record.window_end.isoformat(),
            "target_label": format_date(record.target_date),
            "window_label": format_window(record),
        }
        for record in schedule.records
    ]


def schedule_dataframe(schedule: Schedule) -> pd.DataFrame:
    """Return one row per visit with ISO dates and their display labels.

    Returns
    -------
    pandas.DataFrame
        Columns ``visit_number``, ``target_date``, ``window_start``, ``window_end`` (ISO strings),
        ``target_label`` and ``window_label`` (``DD-Mon-YYYY`` text as shown in the HTML table).
    """
    return pd.DataFrame(_schedule_rows(schedule), columns=SCHEDULE_COLUMNS)


def summarize_schedule(schedule: Schedule, subject_id: str | None = None) -> dict[str, object]:
    """Build a JSON-serialisable summary (metadata plus visit list)."""

    metadata: dict[str, object] = {
        "protocol": schedule.protocol,
        "anchor_date": schedule.anchor_date.isoformat(),
        "subject_id": subject_id,
        "visit_count": len(schedule),
        "span_days": schedule.span_days(),
    }
    return {"metadata": metadata, "visits": _schedule_rows(schedule)}
