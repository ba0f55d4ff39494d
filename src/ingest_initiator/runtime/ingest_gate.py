"""
Ingest gate: decides whether ingest of one file should be (re-)initiated.

Decision, in order:

1. No state recorded for the file: initiate.
2. Last state is the configured final component and final state: the file
   is ingested, do not initiate.
3. Any other state: the workflow is in progress or failed. Initiate only
   once the state is at least ``expected_duration`` old (boundary included);
   a younger run is presumed alive or about to be retried by its own stage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ..domain.interfaces import WorkflowStateLookup
from ..domain.models import WorkflowState

logger = logging.getLogger(__name__)


def should_initiate(
    reference_time: datetime,
    entity: str,
    state: WorkflowState | None,
    *,
    final_component: str,
    final_state: str,
    expected_duration: timedelta,
) -> bool:
    """Apply the gate to one file's last known workflow state."""
    if state is None:
        logger.debug("No workflow state for %s; initiating", entity)
        return True

    if state.component == final_component and state.state_name == final_state:
        logger.debug("%s already completed at %s; skipping", entity, state.last_updated)
        return False

    # Real elapsed time, also across daylight saving changes
    age = reference_time.astimezone(timezone.utc) - state.last_updated.astimezone(timezone.utc)
    stale = age >= expected_duration
    logger.debug(
        "%s last in %s/%s, %s old (threshold %s); %s",
        entity,
        state.component,
        state.state_name,
        age,
        expected_duration,
        "initiating" if stale else "still in progress",
    )
    return stale


@dataclass(frozen=True)
class IngestGate:
    """The gate bound to its configuration and a workflow state lookup."""

    lookup: WorkflowStateLookup
    final_component: str
    final_state: str
    expected_duration: timedelta

    def should_initiate(self, reference_time: datetime, entity: str) -> bool:
        return should_initiate(
            reference_time,
            entity,
            self.lookup.last_state_for(entity),
            final_component=self.final_component,
            final_state=self.final_state,
            expected_duration=self.expected_duration,
        )
