"""
Read-only repositories over the request administration database.

Thin wrappers around SQLAlchemy queries, following the Unit of Work pattern
of ``infra.uow``: callers own the session. Database errors surface as
LookupUnavailable; malformed rows surface as the domain error they cause.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..adapters.memory import unique_mapping
from ..domain.entities import ChannelArchiveRequestRow, YouSeeChannelMappingRow
from ..domain.models import RecordingWindowRequest
from .exceptions import LookupUnavailable


class SqlRequestStore:
    """
    Request store backed by the ``channel_archive_request`` table.

    Returns enabled requests whose validity period overlaps the queried
    range, ordered by id.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_valid_requests(self, from_date: date, to_date: date) -> list[RecordingWindowRequest]:
        stmt = (
            select(ChannelArchiveRequestRow)
            .where(
                ChannelArchiveRequestRow.enabled.is_(True),
                ChannelArchiveRequestRow.from_date <= to_date,
                ChannelArchiveRequestRow.to_date >= from_date,
            )
            .order_by(ChannelArchiveRequestRow.id.asc())
        )
        try:
            rows = self.db.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise LookupUnavailable(f"Unable to load channel archive requests: {exc}") from exc
        return [row.to_domain() for row in rows]


class SqlChannelMapper:
    """Channel mapper backed by the ``yousee_channel_mapping`` table."""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, sb_channel_id: str, on_date: date) -> str:
        stmt = select(YouSeeChannelMappingRow).where(
            YouSeeChannelMappingRow.sb_channel_id == sb_channel_id,
            YouSeeChannelMappingRow.from_date <= on_date,
            YouSeeChannelMappingRow.to_date >= on_date,
        )
        try:
            rows = self.db.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise LookupUnavailable(
                f"Unable to load channel mapping for '{sb_channel_id}': {exc}"
            ) from exc
        matches = [row.to_domain() for row in rows]
        return unique_mapping(sb_channel_id, on_date, matches).yousee_channel_id
