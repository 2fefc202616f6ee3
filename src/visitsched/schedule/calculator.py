"""Visit date generation from an anchor date."""

from __future__ import annotations

import datetime as dt

from visitsched.core.errors import VisitSchedValueError
from visitsched.schedule.models import DEFAULT_PROTOCOL, ProtocolConfig, Schedule, VisitRecord

__all__ = ["compute_schedule"]


def compute_schedule(anchor: dt.date, protocol: ProtocolConfig = DEFAULT_PROTOCOL) -> Schedule:
    """Build the follow-up visit schedule for ``anchor``.

    Parameters
    ----------
    anchor:
        Target date of the first generated visit (visit 2 under the default protocol).
    protocol:
        Spacing rules. With :data:`DEFAULT_PROTOCOL` visits are 56 days apart, except visits 8 and
        10 which follow their predecessor by 84 days.

    Returns
    -------
    Schedule
        One record per visit number in ascending order, each with a ``±window_days`` window.

    Raises
    ------
    VisitSchedValueError
        If ``anchor`` is not a calendar date, or if a target date or window bound would fall
        outside ``datetime.date.min``..``datetime.date.max``. Strings must go through
        :func:`visitsched.schedule.formatting.parse_anchor_date` first.
    """
    # datetime is a date subclass but carries a time component
    if not isinstance(anchor, dt.date) or isinstance(anchor, dt.datetime):
        raise VisitSchedValueError(f"Anchor must be a calendar date (got {anchor!r})")

    records: list[VisitRecord] = []
    current = anchor
    try:
        for visit_number in protocol.visit_numbers():
            record = VisitRecord(
                visit_number=visit_number,
                target_date=current,
                window_days=protocol.window_days,
            )
            # both window bounds must be representable before the record is handed out
            _ = (record.window_start, record.window_end)
            records.append(record)
            if visit_number < protocol.last_visit:
                current = current + dt.timedelta(days=protocol.gap_after(visit_number))
    except OverflowError as exc:
        raise VisitSchedValueError(
            f"Anchor {anchor.isoformat()} schedule falls outside the supported date range"
        ) from exc

    return Schedule(anchor_date=anchor, protocol=protocol.name, records=tuple(records))
