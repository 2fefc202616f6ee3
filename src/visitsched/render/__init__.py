"""Renderers for computed schedules (HTML fragments, tabular exports)."""

from visitsched.render.html import COLUMN_HEADERS, has_table, render_message, render_schedule_html
from visitsched.render.tabular import SCHEDULE_COLUMNS, schedule_dataframe, summarize_schedule

__all__ = [
    "COLUMN_HEADERS",
    "SCHEDULE_COLUMNS",
    "has_table",
    "render_message",
    "render_schedule_html",
    "schedule_dataframe",
    "summarize_schedule",
]
