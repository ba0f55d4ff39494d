"""
Pydantic schemas for the initiator's JSON documents.

Two documents cross the process boundary:

* the download list written for the downloader (``{"downloads": [...]}``)
* workflow state snapshots read from a file exported by the workflow state
  monitor
"""

from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from ..domain.models import IngestCandidate, WorkflowState
from ..runtime.naming import format_timestamp


class DownloadEntry(BaseModel):
    """One file the downloader should fetch."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    file_id: str = Field(..., alias="fileID", description="YouSee file name")
    start_time: str = Field(..., alias="startTime", description="yyyyMMddHHmmss")
    end_time: str = Field(..., alias="endTime", description="yyyyMMddHHmmss")
    yousee_channel_id: str = Field(..., alias="youseeChannelID")
    sb_channel_id: str = Field(..., alias="sbChannelID")

    @classmethod
    def from_candidate(cls, candidate: IngestCandidate) -> DownloadEntry:
        return cls(
            file_id=candidate.yousee_filename,
            start_time=format_timestamp(candidate.start_time),
            end_time=format_timestamp(candidate.end_time),
            yousee_channel_id=candidate.yousee_channel_id,
            sb_channel_id=candidate.sb_channel_id,
        )


class DownloadList(BaseModel):
    """The document handed to the downloader."""

    downloads: list[DownloadEntry] = Field(default_factory=list)


class WorkflowStateRecord(BaseModel):
    """A state as exported by the workflow state monitor."""

    model_config = ConfigDict(populate_by_name=True)

    component: str = Field(..., min_length=1)
    state_name: str = Field(..., min_length=1, alias="stateName")
    date: AwareDatetime = Field(..., description="When the state was reported")
    entity: str = Field(..., min_length=1, description="SB file id the state refers to")
    message: str | None = None

    def to_domain(self) -> WorkflowState:
        return WorkflowState(
            component=self.component,
            state_name=self.state_name,
            last_updated=self.date,
            entity=self.entity,
            message=self.message,
        )
