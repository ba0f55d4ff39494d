"""
Global test configuration for the ingest initiator.

This module provides global pytest configuration and fixtures.
"""

import sys
from datetime import date, time
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from ingest_initiator.domain.models import RecordingWindowRequest  # noqa: E402
from ingest_initiator.infra.settings import Settings  # noqa: E402
from ingest_initiator.shared.types import WeekdayCoverage  # noqa: E402

COPENHAGEN = ZoneInfo("Europe/Copenhagen")


class UpperCaseChannelMapper:
    """Maps every SB channel id to its upper-case form, e.g. dr1 -> DR1.

    Records each lookup so tests can assert on per-file resolution.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, date]] = []

    def resolve(self, sb_channel_id: str, on_date: date) -> str:
        self.calls.append((sb_channel_id, on_date))
        return sb_channel_id.upper()


def _make_request(
    request_id: int = 1,
    sb_channel_id: str = "dr1",
    coverage: WeekdayCoverage = WeekdayCoverage.DAILY,
    from_time: time = time(0, 0),
    to_time: time = time(23, 59),
    from_date: date = date(1970, 1, 1),
    to_date: date = date(2099, 12, 31),
) -> RecordingWindowRequest:
    return RecordingWindowRequest(
        id=request_id,
        sb_channel_id=sb_channel_id,
        weekday_coverage=coverage,
        from_time=from_time,
        to_time=to_time,
        from_date=from_date,
        to_date=to_date,
    )


@pytest.fixture
def make_request():
    """Factory for recording window requests; defaults record dr1 all day, every day."""
    return _make_request


@pytest.fixture
def tz() -> ZoneInfo:
    return COPENHAGEN


@pytest.fixture
def mapper() -> UpperCaseChannelMapper:
    return UpperCaseChannelMapper()


@pytest.fixture
def settings() -> Settings:
    """Settings matching the production defaults, independent of the environment."""
    return Settings(
        database_url="sqlite://",
        recordings_days_to_keep=28,
        expected_ingest_duration_hours=12,
        final_workflow_component_name="Yousee complete workflow final step",
        final_workflow_state_name="Completed",
        archive_timezone="Europe/Copenhagen",
        env="test",
    )
