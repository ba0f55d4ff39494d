"""Tests for value type construction."""

from datetime import date, datetime, time, timezone

import pytest

from ingest_initiator.domain.models import RecordingWindowRequest, WorkflowState
from ingest_initiator.infra.exceptions import UnknownCoverageValue
from ingest_initiator.runtime.interval_expander import expand
from ingest_initiator.shared.types import WeekdayCoverage


def _request(coverage):
    return RecordingWindowRequest(
        id=1,
        sb_channel_id="dr1",
        weekday_coverage=coverage,
        from_time=time(8, 0),
        to_time=time(9, 0),
        from_date=date(2010, 1, 1),
        to_date=date(2010, 12, 31),
    )


class TestRecordingWindowRequest:
    def test_text_coverage_is_parsed(self):
        assert _request("EVERY_DAY").weekday_coverage is WeekdayCoverage.DAILY
        assert _request("monday").weekday_coverage is WeekdayCoverage.MONDAY

    def test_unknown_text_coverage_raises(self):
        with pytest.raises(UnknownCoverageValue):
            _request("WEEKENDS")

    def test_text_coverage_expands(self, mapper, tz):
        files = expand([_request("EVERY_DAY")], date(2010, 3, 1), date(2010, 3, 2), mapper, tz=tz)
        assert len(files) == 2


class TestWorkflowState:
    def test_aware_timestamp_accepted(self):
        state = WorkflowState("c", "s", datetime(2012, 1, 20, tzinfo=timezone.utc), "entity")
        assert state.last_updated.tzinfo is timezone.utc

    def test_naive_timestamp_rejected(self):
        with pytest.raises(ValueError, match="naive timestamp"):
            WorkflowState("c", "s", datetime(2012, 1, 20), "entity")
