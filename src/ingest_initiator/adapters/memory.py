"""
In-memory implementations of the initiator's collaborators.

Used by tests and by the CLI when workflow states come from a snapshot file
rather than a live monitor.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date, datetime, timezone
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..domain.models import ChannelMapping, RecordingWindowRequest, WorkflowState
from ..infra.exceptions import LookupUnavailable, MappingResolutionError
from ..shared.schemas import WorkflowStateRecord


class InMemoryRequestStore:
    """
    Request store preloaded with fixture requests.

    Usage:
        store = InMemoryRequestStore([request])
        store.add(other_request)
        store.get_valid_requests(date(2010, 3, 1), date(2010, 3, 7))
    """

    def __init__(self, requests: Iterable[RecordingWindowRequest] | None = None) -> None:
        self._requests: list[RecordingWindowRequest] = list(requests) if requests else []

    def add(self, request: RecordingWindowRequest) -> None:
        self._requests.append(request)

    def get_valid_requests(self, from_date: date, to_date: date) -> list[RecordingWindowRequest]:
        return [
            r for r in self._requests if r.from_date <= to_date and r.to_date >= from_date
        ]


class StaticChannelMapper:
    """Channel mapper backed by a fixed list of dated mappings."""

    def __init__(self, mappings: Iterable[ChannelMapping] | None = None) -> None:
        self._mappings: list[ChannelMapping] = list(mappings) if mappings else []

    def add(self, mapping: ChannelMapping) -> None:
        self._mappings.append(mapping)

    def resolve(self, sb_channel_id: str, on_date: date) -> str:
        matches = [
            m
            for m in self._mappings
            if m.sb_channel_id == sb_channel_id and m.is_valid_on(on_date)
        ]
        return unique_mapping(sb_channel_id, on_date, matches).yousee_channel_id


def unique_mapping(
    sb_channel_id: str, on_date: date, matches: list[ChannelMapping]
) -> ChannelMapping:
    """Return the single mapping in ``matches`` or raise MappingResolutionError."""
    if not matches:
        raise MappingResolutionError(
            f"No YouSee channel mapping for '{sb_channel_id}' on {on_date.isoformat()}"
        )
    if len(matches) > 1:
        found = ", ".join(sorted(m.yousee_channel_id for m in matches))
        raise MappingResolutionError(
            f"Ambiguous YouSee channel mapping for '{sb_channel_id}' on "
            f"{on_date.isoformat()}: {found}"
        )
    return matches[0]


class InMemoryWorkflowStateLookup:
    """Keeps the most recent state per entity."""

    def __init__(self, states: Iterable[WorkflowState] | None = None) -> None:
        self._latest: dict[str, WorkflowState] = {}
        for state in states or ():
            self.record(state)

    def record(self, state: WorkflowState) -> None:
        current = self._latest.get(state.entity)
        if current is None or _instant(state) >= _instant(current):
            self._latest[state.entity] = state

    def last_state_for(self, entity: str) -> WorkflowState | None:
        return self._latest.get(entity)

    def __len__(self) -> int:
        return len(self._latest)


def _instant(state: WorkflowState) -> datetime:
    return state.last_updated.astimezone(timezone.utc)


_SNAPSHOT_ADAPTER = TypeAdapter(list[WorkflowStateRecord])


def load_workflow_state_snapshot(path: str | Path) -> InMemoryWorkflowStateLookup:
    """Load a JSON list of workflow states into a lookup.

    Raises:
        LookupUnavailable: If the file cannot be read or is not a valid snapshot
    """
    snapshot_path = Path(path)
    try:
        raw = json.loads(snapshot_path.read_text(encoding="utf-8"))
        records = _SNAPSHOT_ADAPTER.validate_python(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise LookupUnavailable(
            f"Unable to read workflow state snapshot {snapshot_path}: {exc}"
        ) from exc
    return InMemoryWorkflowStateLookup(record.to_domain() for record in records)
