"""
Shared types and enums for the ingest initiator.

This module contains common types and enums that are used across
the domain, persistence, CLI and runtime layers.
"""

from __future__ import annotations

from enum import Enum

from ..infra.exceptions import UnknownCoverageValue

# ISO weekday numbers (date.isoweekday())
MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(1, 8)


class WeekdayCoverage(str, Enum):
    """Days of the week on which a channel archive request records."""

    DAILY = "DAILY"
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"
    MONDAY_TO_THURSDAY = "MONDAY_TO_THURSDAY"
    MONDAY_TO_FRIDAY = "MONDAY_TO_FRIDAY"
    SATURDAY_AND_SUNDAY = "SATURDAY_AND_SUNDAY"

    @classmethod
    def parse(cls, value: str | WeekdayCoverage) -> WeekdayCoverage:
        """Parse a stored coverage value.

        ``EVERY_DAY`` is accepted as an alias of ``DAILY``. Anything else
        outside the enumeration raises UnknownCoverageValue.
        """
        if isinstance(value, WeekdayCoverage):
            return value
        normalized = str(value).strip().upper()
        if normalized == "EVERY_DAY":
            return cls.DAILY
        try:
            return cls(normalized)
        except ValueError:
            raise UnknownCoverageValue(f"Unknown weekday coverage: {value!r}") from None

    def weekdays(self) -> frozenset[int]:
        """ISO weekday numbers covered by this value."""
        match self:
            case WeekdayCoverage.DAILY:
                return frozenset(range(MONDAY, SUNDAY + 1))
            case WeekdayCoverage.MONDAY:
                return frozenset({MONDAY})
            case WeekdayCoverage.TUESDAY:
                return frozenset({TUESDAY})
            case WeekdayCoverage.WEDNESDAY:
                return frozenset({WEDNESDAY})
            case WeekdayCoverage.THURSDAY:
                return frozenset({THURSDAY})
            case WeekdayCoverage.FRIDAY:
                return frozenset({FRIDAY})
            case WeekdayCoverage.SATURDAY:
                return frozenset({SATURDAY})
            case WeekdayCoverage.SUNDAY:
                return frozenset({SUNDAY})
            case WeekdayCoverage.MONDAY_TO_THURSDAY:
                return frozenset({MONDAY, TUESDAY, WEDNESDAY, THURSDAY})
            case WeekdayCoverage.MONDAY_TO_FRIDAY:
                return frozenset({MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY})
            case WeekdayCoverage.SATURDAY_AND_SUNDAY:
                return frozenset({SATURDAY, SUNDAY})
            case _:
                raise UnknownCoverageValue(f"Unknown weekday coverage: {self!r}")

    def covers(self, isoweekday: int) -> bool:
        return isoweekday in self.weekdays()
