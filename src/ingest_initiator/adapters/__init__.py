"""Adapters implementing the initiator's collaborator interfaces."""

from .memory import (
    InMemoryRequestStore,
    InMemoryWorkflowStateLookup,
    StaticChannelMapper,
    load_workflow_state_snapshot,
)

__all__ = [
    "InMemoryRequestStore",
    "InMemoryWorkflowStateLookup",
    "StaticChannelMapper",
    "load_workflow_state_snapshot",
]
