"""
Value types for the ingest initiator.

These types are the authoritative definitions of the data flowing between
the request store, the interval expander and the ingest gate. They are
immutable once created.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

from ..shared.types import WeekdayCoverage


@dataclass(frozen=True)
class RecordingWindowRequest:
    """
    A recurring rule describing when a channel should be archived.

    The request is active on every day inside ``[from_date, to_date]`` whose
    weekday is covered by ``weekday_coverage``; on those days the window
    ``[from_time, to_time]`` is recorded. Windows crossing midnight are not
    supported.
    """

    id: int
    sb_channel_id: str
    weekday_coverage: WeekdayCoverage
    from_time: time
    to_time: time
    from_date: date
    to_date: date

    def __post_init__(self) -> None:
        # Accepts the stored text form, e.g. "EVERY_DAY"
        object.__setattr__(self, "weekday_coverage", WeekdayCoverage.parse(self.weekday_coverage))


@dataclass(frozen=True, order=True)
class IngestCandidate:
    """
    One whole-hour archive file expected to exist and require ingestion.

    Field order defines the sort order: start time, then YouSee file name,
    then channel ids. Equality covers every field, so two requests covering
    the same hour on the same channel produce equal candidates.
    """

    start_time: datetime
    yousee_filename: str
    yousee_channel_id: str
    sb_channel_id: str
    end_time: datetime

    def __repr__(self) -> str:
        return (
            f"<IngestCandidate(file={self.yousee_filename}, sb_channel={self.sb_channel_id}, "
            f"start={self.start_time.isoformat()}, end={self.end_time.isoformat()})>"
        )


@dataclass(frozen=True)
class WorkflowState:
    """Last reported stage and status of a file's ingest workflow."""

    component: str
    state_name: str
    last_updated: datetime
    entity: str
    message: str | None = None

    def __post_init__(self) -> None:
        if self.last_updated.tzinfo is None or self.last_updated.utcoffset() is None:
            raise ValueError(
                f"Workflow state for {self.entity} has a naive timestamp: {self.last_updated}"
            )


@dataclass(frozen=True)
class ChannelMapping:
    """Mapping from an SB channel id to a YouSee channel id over a date range."""

    sb_channel_id: str
    yousee_channel_id: str
    valid_from: date
    valid_to: date
    display_name: str | None = None

    def is_valid_on(self, day: date) -> bool:
        return self.valid_from <= day <= self.valid_to
