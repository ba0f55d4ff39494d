"""
Persistence entities for the ingest initiator.

These ORM rows mirror the tables maintained by the channel archive request
administration. The initiator only reads them and converts rows into the
immutable value types of ``domain.models``.
"""

from __future__ import annotations

from datetime import date
from datetime import time as dt_time

import sqlalchemy as sa
from sqlalchemy import Boolean, Date, Index, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from ..infra.db import Base
from ..shared.types import WeekdayCoverage
from .models import ChannelMapping, RecordingWindowRequest


class ChannelArchiveRequestRow(Base):
    """A recurring recording window for one SB channel."""

    __tablename__ = "channel_archive_request"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sb_channel_id: Mapped[str] = mapped_column(String(255), nullable=False)
    # Stored as text; parsed strictly in to_domain() so unknown values fail loudly
    weekday_coverage: Mapped[str] = mapped_column(String(32), nullable=False)
    from_time: Mapped[dt_time] = mapped_column(Time(timezone=False), nullable=False)
    to_time: Mapped[dt_time] = mapped_column(Time(timezone=False), nullable=False)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)
    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.true()
    )

    __table_args__ = (
        Index("ix_channel_archive_request_sb_channel_id", "sb_channel_id"),
        Index("ix_channel_archive_request_dates", "from_date", "to_date"),
    )

    def to_domain(self) -> RecordingWindowRequest:
        return RecordingWindowRequest(
            id=self.id,
            sb_channel_id=self.sb_channel_id,
            weekday_coverage=WeekdayCoverage.parse(self.weekday_coverage),
            from_time=self.from_time,
            to_time=self.to_time,
            from_date=self.from_date,
            to_date=self.to_date,
        )

    def __repr__(self) -> str:
        return (
            f"<ChannelArchiveRequestRow(id={self.id}, sb_channel_id={self.sb_channel_id}, "
            f"coverage={self.weekday_coverage}, {self.from_time}-{self.to_time}, "
            f"{self.from_date}..{self.to_date})>"
        )


class YouSeeChannelMappingRow(Base):
    """Mapping of an SB channel id to the YouSee channel id used in file names."""

    __tablename__ = "yousee_channel_mapping"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sb_channel_id: Mapped[str] = mapped_column(String(255), nullable=False)
    yousee_channel_id: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("ix_yousee_channel_mapping_sb_channel_id", "sb_channel_id"),
    )

    def to_domain(self) -> ChannelMapping:
        return ChannelMapping(
            sb_channel_id=self.sb_channel_id,
            yousee_channel_id=self.yousee_channel_id,
            valid_from=self.from_date,
            valid_to=self.to_date,
            display_name=self.display_name,
        )

    def __repr__(self) -> str:
        return (
            f"<YouSeeChannelMappingRow(sb={self.sb_channel_id}, yousee={self.yousee_channel_id}, "
            f"{self.from_date}..{self.to_date})>"
        )
