"""Schedule contract models (protocol parameters, visit records, schedules)."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

__all__ = ["ProtocolConfig", "VisitRecord", "Schedule", "DEFAULT_PROTOCOL"]


class ProtocolConfig(BaseModel):
    """Visit spacing rules for a study protocol.

    Attributes
    ----------
    name:
        Human-readable protocol label used in exports and telemetry.
    first_visit, last_visit:
        Inclusive range of visit numbers generated from the anchor date. The anchor date itself is
        the target of ``first_visit``.
    interval_days:
        Default spacing between consecutive target dates.
    extended_after:
        Visit numbers whose *successor* receives ``extension_days`` on top of ``interval_days``.
    extension_days:
        Extra spacing applied after each visit listed in ``extended_after``.
    window_days:
        Tolerance on either side of each target date.
    """

    name: str = "default"
    first_visit: int = 2
    last_visit: int = 10
    interval_days: int = 56
    extended_after: tuple[int, ...] = (7, 9)
    extension_days: int = 28
    window_days: int = 7

    @field_validator("interval_days")
    @classmethod
    def _interval_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("interval_days must be positive")
        return value

    @field_validator("extension_days", "window_days")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("extension_days and window_days must be non-negative")
        return value

    @model_validator(mode="after")
    def _check_visit_range(self) -> ProtocolConfig:
        if self.last_visit < self.first_visit:
            raise ValueError(
                f"last_visit={self.last_visit} must be >= first_visit={self.first_visit}"
            )
        for visit in self.extended_after:
            if not self.first_visit <= visit < self.last_visit:
                raise ValueError(
                    f"extended_after entry {visit} outside "
                    f"[{self.first_visit}, {self.last_visit})"
                )
        return self

    def visit_numbers(self) -> list[int]:
        return list(range(self.first_visit, self.last_visit + 1))

    def gap_after(self, visit_number: int) -> int:
        """Days between ``visit_number`` and the visit that follows it."""
        gap = self.interval_days
        if visit_number in self.extended_after:
            gap += self.extension_days
        return gap


DEFAULT_PROTOCOL = ProtocolConfig()


class VisitRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    visit_number: int
    target_date: dt.date
    window_days: int = 7

    @property
    def window_start(self) -> dt.date:
        return self.target_date - dt.timedelta(days=self.window_days)

    @property
    def window_end(self) -> dt.date:
        return self.target_date + dt.timedelta(days=self.window_days)

    @property
    def label(self) -> str:
        return f"Visit {self.visit_number}"


class Schedule(BaseModel):
    """Ordered visit records derived from a single anchor date."""

    model_config = ConfigDict(frozen=True)

    anchor_date: dt.date
    protocol: str = DEFAULT_PROTOCOL.name
    records: tuple[VisitRecord, ...]

    @model_validator(mode="after")
    def _check_ordering(self) -> Schedule:
        for previous, current in zip(self.records, self.records[1:]):
            if current.visit_number <= previous.visit_number:
                raise ValueError(
                    f"Visit {current.visit_number} listed after visit {previous.visit_number}"
                )
            if current.target_date <= previous.target_date:
                raise ValueError(
                    f"Visit {current.visit_number} target {current.target_date} does not follow "
                    f"visit {previous.visit_number} target {previous.target_date}"
                )
        return self

    def __len__(self) -> int:
        return len(self.records)

    def visit_numbers(self) -> list[int]:
        return [r.visit_number for r in self.records]

    def target_dates(self) -> list[dt.date]:
        return [r.target_date for r in self.records]

    def gaps_days(self) -> list[int]:
        dates = self.target_dates()
        return [(later - earlier).days for earlier, later in zip(dates, dates[1:])]

    def span_days(self) -> int:
        if not self.records:
            return 0
        return (self.records[-1].target_date - self.records[0].target_date).days

    def record_for(self, visit_number: int) -> VisitRecord:
        for record in self.records:
            if record.visit_number == visit_number:
                return record
        raise KeyError(f"Visit {visit_number} is not part of this schedule")
