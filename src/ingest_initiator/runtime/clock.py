"""Clock abstractions supplying the reference time of an ingest run.

The ingest gate compares workflow state timestamps against "now". Runs take
now from a clock so tests can pin it.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Protocol implemented by clock providers."""

    def now_utc(self) -> datetime:
        """Return the current time as an aware UTC datetime."""


class MasterClock:
    """Wall clock providing timezone-aware timestamps."""

    def now_utc(self) -> datetime:
        """Return current UTC time as an aware datetime."""
        return datetime.now(timezone.utc)

    def now_local(self, tz: tzinfo) -> datetime:
        """Return current time in the requested timezone."""
        return self.now_utc().astimezone(tz)


class FixedClock:
    """Deterministic clock used for tests and replays.

    Time only changes when :meth:`set` is called.
    """

    def __init__(self, now: datetime) -> None:
        self._ensure_aware(now)
        self._now = now

    def now_utc(self) -> datetime:
        return self._now.astimezone(timezone.utc)

    def now_local(self, tz: tzinfo) -> datetime:
        return self._now.astimezone(tz)

    def set(self, now: datetime) -> None:
        self._ensure_aware(now)
        self._now = now

    @staticmethod
    def _ensure_aware(dt: datetime) -> None:
        if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
            raise ValueError("Datetime must be timezone-aware")
