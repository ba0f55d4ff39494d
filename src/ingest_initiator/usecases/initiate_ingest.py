"""
Initiate ingest of new archive files for a target date.

A run goes through these steps:

1. Derive the download period: the target date and the days before it that
   YouSee still keeps (the target date counts as one day).
2. Load the channel archive requests valid in that period.
3. Expand them into the hourly files to download.
4. Gate every file on its last workflow state, keyed by its SB file id.
5. Hand the surviving files to the download list writer.

Any failure aborts the run; no partial download list is produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TextIO

from ..domain.interfaces import ChannelMapper, RequestStore, WorkflowStateLookup
from ..domain.models import IngestCandidate, RecordingWindowRequest
from ..infra.exceptions import ConfigurationError, IngestInitiatorError, LookupUnavailable
from ..infra.logging import get_logger
from ..infra.settings import Settings
from ..planning.download_list_writer import write_download_list
from ..runtime.clock import Clock, MasterClock
from ..runtime.ingest_gate import IngestGate
from ..runtime.interval_expander import expand
from ..runtime.naming import sb_file_id

_log = get_logger(__name__)


def retention_window(target_date: date, retention_days: int) -> tuple[date, date]:
    """Return ``(from_date, to_date)`` covering ``retention_days`` days ending on ``target_date``."""
    if retention_days < 1:
        raise ConfigurationError(f"retention days must be at least 1, got {retention_days}")
    return target_date - timedelta(days=retention_days - 1), target_date


@dataclass
class IngestInitiator:
    """Wires the request store, interval expander and ingest gate together."""

    settings: Settings
    request_store: RequestStore
    channel_mapper: ChannelMapper
    workflow_states: WorkflowStateLookup
    clock: Clock = field(default_factory=MasterClock)

    @property
    def gate(self) -> IngestGate:
        return IngestGate(
            lookup=self.workflow_states,
            final_component=self.settings.final_workflow_component_name,
            final_state=self.settings.final_workflow_state_name,
            expected_duration=self.settings.expected_ingest_duration,
        )

    def infer_files(self, target_date: date, retention_days: int | None = None) -> list[IngestCandidate]:
        """All hourly files for the download period, before gating."""
        return self._infer_files(target_date, retention_days, _log.bind(env=self.settings.env))

    def _infer_files(self, target_date: date, retention_days: int | None, log) -> list[IngestCandidate]:
        days = self.settings.recordings_days_to_keep if retention_days is None else retention_days
        from_date, to_date = retention_window(target_date, days)
        requests = self._load_requests(from_date, to_date, log)
        return expand(
            requests, from_date, to_date, self.channel_mapper, tz=self.settings.tzinfo
        )

    def run(
        self,
        target_date: date,
        retention_days: int | None = None,
        *,
        reference_time: datetime | None = None,
    ) -> list[IngestCandidate]:
        """Return the files whose ingest should be initiated, in download order."""
        now = reference_time if reference_time is not None else self.clock.now_utc()
        if now.tzinfo is None:
            raise ValueError("reference_time must be timezone-aware")

        log = _log.bind(env=self.settings.env, target_date=target_date.isoformat())
        log.info("ingest_initiation_started")
        files = self._infer_files(target_date, retention_days, log)

        gate = self.gate
        selected = [c for c in files if self._should_initiate(gate, now, c)]
        log.info(
            "ingest_initiation_done",
            inferred=len(files),
            selected=len(selected),
            suppressed=len(files) - len(selected),
        )
        return selected

    def initiate(
        self,
        target_date: date,
        stream: TextIO,
        retention_days: int | None = None,
        *,
        reference_time: datetime | None = None,
    ) -> list[IngestCandidate]:
        """Run and write the download list to ``stream``."""
        selected = self.run(target_date, retention_days, reference_time=reference_time)
        write_download_list(selected, stream)
        return selected

    def _load_requests(self, from_date: date, to_date: date, log) -> list[RecordingWindowRequest]:
        try:
            requests = list(self.request_store.get_valid_requests(from_date, to_date))
        except IngestInitiatorError:
            raise
        except Exception as exc:
            raise LookupUnavailable(f"Request store failed: {exc}") from exc
        log.debug(
            "requests_loaded",
            from_date=from_date.isoformat(),
            to_date=to_date.isoformat(),
            count=len(requests),
        )
        return requests

    @staticmethod
    def _should_initiate(gate: IngestGate, now: datetime, candidate: IngestCandidate) -> bool:
        entity = sb_file_id(candidate.sb_channel_id, candidate.start_time, candidate.end_time)
        try:
            return gate.should_initiate(now, entity)
        except IngestInitiatorError:
            raise
        except Exception as exc:
            raise LookupUnavailable(f"Workflow state lookup failed for {entity}: {exc}") from exc
