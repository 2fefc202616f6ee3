from __future__ import annotations

import json
from contextlib import nullcontext
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from visitsched.cli._utils import ensure_parent, protocol_table, resolve_protocol, schedule_table
from visitsched.core.errors import PrintRejectedError
from visitsched.form import ScheduleForm, ScheduleFormController
from visitsched.printing import get_print_sink, print_schedule
from visitsched.render import schedule_dataframe, summarize_schedule
from visitsched.telemetry import RunTelemetryLogger

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


@app.command()
def generate(
    start_date: Annotated[
        str | None,
        typer.Option("--start-date", "-d", help="Anchor date (YYYY-MM-DD) for the first visit."),
    ] = None,
    subject_id: Annotated[
        str | None, typer.Option("--subject-id", "-s", help="Subject identifier.")
    ] = None,
    require_subject: Annotated[
        bool,
        typer.Option(
            "--require-subject/--no-require-subject",
            help="Require a subject ID in addition to the start date.",
        ),
    ] = True,
    protocol_path: Annotated[
        Path | None,
        typer.Option("--protocol", "-p", help="Protocol YAML (defaults to the built-in protocol)."),
    ] = None,
    out_html: Annotated[
        Path | None, typer.Option("--out-html", help="Write the schedule table HTML fragment.")
    ] = None,
    out_csv: Annotated[
        Path | None, typer.Option("--out-csv", help="Write the schedule as CSV.")
    ] = None,
    out_json: Annotated[
        Path | None, typer.Option("--out-json", help="Write the schedule summary as JSON.")
    ] = None,
    print_to: Annotated[
        Path | None,
        typer.Option("--print-to", help="Write a print-formatted HTML document to this path."),
    ] = None,
    open_browser: Annotated[
        bool,
        typer.Option("--open", help="Open the print document in the system browser."),
    ] = False,
    telemetry_log: Annotated[
        Path | None,
        typer.Option("--telemetry-log", help="Append a JSONL run record to this path."),
    ] = None,
):
    """Generate the visit schedule for a start date."""
    if open_browser and print_to is None:
        raise typer.BadParameter("--open requires --print-to")

    protocol = resolve_protocol(protocol_path)
    controller = ScheduleFormController(protocol, require_subject_id=require_subject)

    telemetry_config = {
        "protocol_path": str(protocol_path) if protocol_path else None,
        "require_subject": require_subject,
        "outputs": [
            name
            for name, value in (
                ("html", out_html),
                ("csv", out_csv),
                ("json", out_json),
                ("print", print_to),
            )
            if value is not None
        ],
    }
    run_logger = (
        RunTelemetryLogger(
            log_path=telemetry_log,
            command="generate",
            protocol=protocol.name,
            config=telemetry_config,
        )
        if telemetry_log
        else nullcontext(None)
    )

    with run_logger as telemetry:
        output = controller.submit(ScheduleForm(subject_id=subject_id, start_date=start_date))
        schedule = output.schedule
        if schedule is None:
            console.print(f"[red]{escape(output.message or 'No schedule generated.')}[/red]")
            console.print("Printing disabled until a schedule is generated.")
            if telemetry is not None:
                telemetry.finalize(status="rejected", error=output.message)
            raise typer.Exit(1)

        console.print(schedule_table(schedule, subject_id))

        artifacts: list[str] = []
        if out_html:
            ensure_parent(out_html).write_text(output.html + "\n", encoding="utf-8")
            console.print(f"Wrote schedule table to {out_html}")
            artifacts.append(str(out_html))
        if out_csv:
            schedule_dataframe(schedule).to_csv(ensure_parent(out_csv), index=False)
            console.print(f"Wrote schedule CSV to {out_csv}")
            artifacts.append(str(out_csv))
        if out_json:
            summary = summarize_schedule(schedule, subject_id)
            ensure_parent(out_json).write_text(json.dumps(summary, indent=2), encoding="utf-8")
            console.print(f"Wrote schedule summary to {out_json}")
            artifacts.append(str(out_json))
        if print_to:
            sink = get_print_sink("file", path=print_to, open_browser=open_browser)
            controller.print_schedule(sink)
            console.print(f"Wrote print document to {print_to}")
            artifacts.append(str(print_to))

        if telemetry is not None:
            telemetry.finalize(
                metrics={"visit_count": len(schedule), "span_days": schedule.span_days()},
                artifacts=artifacts,
            )


@app.command("print")
def print_cmd(
    fragment: Annotated[
        Path,
        typer.Argument(
            exists=True, dir_okay=False, help="HTML fragment written by `generate --out-html`."
        ),
    ],
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write the print document here instead of stdout."),
    ] = None,
    open_browser: Annotated[
        bool, typer.Option("--open", help="Open the written document in the system browser.")
    ] = False,
    telemetry_log: Annotated[
        Path | None,
        typer.Option("--telemetry-log", help="Append a JSONL run record to this path."),
    ] = None,
):
    """Wrap a previously generated schedule table in a print-formatted document."""
    if open_browser and out is None:
        raise typer.BadParameter("--open requires --out")

    content = fragment.read_text(encoding="utf-8")
    if out is not None:
        sink = get_print_sink("file", path=out, open_browser=open_browser)
    else:
        sink = get_print_sink("stream")
    run_logger = (
        RunTelemetryLogger(
            log_path=telemetry_log,
            command="print",
            config={"fragment": str(fragment), "output": str(out) if out else "stdout"},
        )
        if telemetry_log
        else nullcontext(None)
    )

    with run_logger as telemetry:
        try:
            print_schedule(content, sink)
        except PrintRejectedError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            if telemetry is not None:
                telemetry.finalize(status="rejected", error=str(exc))
            raise typer.Exit(1)
        if out is not None:
            console.print(f"Wrote print document to {out}")
        if telemetry is not None:
            telemetry.finalize(artifacts=[str(out)] if out else [])


@app.command("protocol")
def protocol_cmd(
    path: Annotated[
        Path | None, typer.Argument(help="Protocol YAML to validate (omit for the default).")
    ] = None,
):
    """Validate and display a protocol configuration."""
    protocol = resolve_protocol(path)
    console.print(protocol_table(protocol))
    gaps = [protocol.gap_after(v) for v in protocol.visit_numbers()[:-1]]
    console.print(f"Gaps (days): {', '.join(str(g) for g in gaps)}; total span {sum(gaps)} days")


if __name__ == "__main__":
    app()
