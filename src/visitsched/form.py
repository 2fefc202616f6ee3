"""Form controller owning the schedule output area and the print action.

The controller is the only stateful piece: it keeps the most recent output so that a later print
request can check whether a table was actually rendered. Schedule computation itself stays in
:func:`visitsched.schedule.compute_schedule`.
"""

from __future__ import annotations

from dataclasses import dataclass

from visitsched.core.errors import MissingInputError, VisitSchedValueError
from visitsched.printing.base import PrintSink, print_schedule
from visitsched.render.html import render_message, render_schedule_html
from visitsched.schedule.calculator import compute_schedule
from visitsched.schedule.formatting import parse_anchor_date
from visitsched.schedule.models import DEFAULT_PROTOCOL, ProtocolConfig, Schedule

__all__ = [
    "INITIAL_MESSAGE",
    "INVALID_DATE_MESSAGE",
    "MISSING_DATE_MESSAGE",
    "MISSING_INPUT_MESSAGE",
    "OUT_OF_RANGE_MESSAGE",
    "FormOutput",
    "ScheduleForm",
    "ScheduleFormController",
    "validate_form",
]

INITIAL_MESSAGE = 'Please enter Subject ID and select a start date, then click "Generate Schedule".'
MISSING_INPUT_MESSAGE = (
    "Please enter both Subject ID and select a start date to generate the schedule."
)
MISSING_DATE_MESSAGE = "Please select a start date to generate the schedule."
INVALID_DATE_MESSAGE = "Please select a valid start date (YYYY-MM-DD) to generate the schedule."
OUT_OF_RANGE_MESSAGE = "The schedule for this start date falls outside the supported date range."


@dataclass(slots=True)
class ScheduleForm:
    """Raw values submitted by the schedule form."""

    subject_id: str | None = None
    start_date: str | None = None


@dataclass(slots=True)
class FormOutput:
    html: str
    print_enabled: bool = False
    schedule: Schedule | None = None
    message: str | None = None


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_form(form: ScheduleForm, *, require_subject_id: bool = True) -> None:
    """Raise :class:`MissingInputError` when a required field is blank."""
    if _blank(form.start_date) or (require_subject_id and _blank(form.subject_id)):
        message = MISSING_INPUT_MESSAGE if require_subject_id else MISSING_DATE_MESSAGE
        raise MissingInputError(message)


class ScheduleFormController:
    """Generate schedules on form submission and gate printing on a rendered table.

    Parameters
    ----------
    protocol:
        Spacing rules passed to :func:`compute_schedule`.
    require_subject_id:
        When ``True`` (default) both the subject ID and the start date must be filled in. Set to
        ``False`` for the date-only form.
    """

    def __init__(
        self,
        protocol: ProtocolConfig = DEFAULT_PROTOCOL,
        *,
        require_subject_id: bool = True,
    ) -> None:
        self.protocol = protocol
        self.require_subject_id = require_subject_id
        initial = INITIAL_MESSAGE if require_subject_id else MISSING_DATE_MESSAGE
        self.output = FormOutput(html=render_message(initial), message=initial)

    @property
    def print_enabled(self) -> bool:
        return self.output.print_enabled

    def submit(self, form: ScheduleForm) -> FormOutput:
        """Handle a form submission, replacing the current output."""
        try:
            validate_form(form, require_subject_id=self.require_subject_id)
            anchor = parse_anchor_date(form.start_date or "")
        except MissingInputError as exc:
            self.output = FormOutput(html=render_message(str(exc)), message=str(exc))
            return self.output
        except VisitSchedValueError:
            self.output = FormOutput(
                html=render_message(INVALID_DATE_MESSAGE), message=INVALID_DATE_MESSAGE
            )
            return self.output

        try:
            schedule = compute_schedule(anchor, self.protocol)
        except VisitSchedValueError:
            self.output = FormOutput(
                html=render_message(OUT_OF_RANGE_MESSAGE), message=OUT_OF_RANGE_MESSAGE
            )
            return self.output

        subject_id = form.subject_id.strip() if form.subject_id else None
        self.output = FormOutput(
            html=render_schedule_html(schedule, subject_id),
            print_enabled=True,
            schedule=schedule,
        )
        return self.output

    def print_schedule(self, sink: PrintSink) -> str:
        """Print the current output; raises ``PrintRejectedError`` when no table exists."""
        return print_schedule(self.output.html, sink)
