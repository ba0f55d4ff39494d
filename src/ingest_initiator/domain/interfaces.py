"""Capabilities the initiator consumes but does not implement.

Adapters live in ``ingest_initiator.adapters`` (in-memory) and
``ingest_initiator.infra.repositories`` (SQLAlchemy).
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable

from .models import RecordingWindowRequest, WorkflowState


@runtime_checkable
class RequestStore(Protocol):
    """Source of channel archive requests."""

    def get_valid_requests(self, from_date: date, to_date: date) -> list[RecordingWindowRequest]:
        """Return requests whose validity period overlaps ``[from_date, to_date]``.

        Raises:
            LookupUnavailable: If the backing store cannot be read
        """


@runtime_checkable
class ChannelMapper(Protocol):
    """Maps SB channel ids to YouSee channel ids; the mapping may change over time."""

    def resolve(self, sb_channel_id: str, on_date: date) -> str:
        """Return the YouSee channel id valid for ``sb_channel_id`` on ``on_date``.

        Raises:
            MappingResolutionError: If zero or several mappings are valid on that date
        """


@runtime_checkable
class WorkflowStateLookup(Protocol):
    """Read access to the workflow state monitor."""

    def last_state_for(self, entity: str) -> WorkflowState | None:
        """Return the most recent state reported for ``entity``, or None if never observed.

        Raises:
            LookupUnavailable: If the monitor cannot be queried
        """
