"""CLI helper utilities for visitsched."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from visitsched.core.errors import ProtocolConfigError
from visitsched.render.html import COLUMN_HEADERS
from visitsched.schedule.formatting import format_date, format_window
from visitsched.schedule.io import load_protocol
from visitsched.schedule.models import ProtocolConfig, Schedule


def resolve_protocol(path: Path | None) -> ProtocolConfig:
    """Load ``path`` (or the default protocol), reporting bad files as CLI parameter errors."""
    try:
        return load_protocol(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Protocol file not found: {exc}") from exc
    except ProtocolConfigError as exc:
        raise typer.BadParameter(f"Invalid protocol file {path}: {exc}") from exc


def ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def schedule_table(schedule: Schedule, subject_id: str | None = None) -> Table:
    """Rich rendering of the same three columns shown in the HTML table."""
    title = "Visit Schedule"
    if subject_id:
        title = f"Visit Schedule for Subject ID: {escape(subject_id)}"
    table = Table(title=title)
    for name in COLUMN_HEADERS:
        table.add_column(name)
    for record in schedule.records:
        table.add_row(record.label, format_date(record.target_date), format_window(record))
    return table


def protocol_table(protocol: ProtocolConfig) -> Table:
    table = Table(title=f"Protocol: {protocol.name}")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Visits", f"{protocol.first_visit}-{protocol.last_visit}")
    table.add_row("Interval (days)", str(protocol.interval_days))
    extended = ", ".join(str(v) for v in protocol.extended_after) or "none"
    table.add_row("Extended after visits", extended)
    table.add_row("Extension (days)", str(protocol.extension_days))
    table.add_row("Window (+/- days)", str(protocol.window_days))
    return table


__all__ = ["resolve_protocol", "ensure_parent", "schedule_table", "protocol_table"]
