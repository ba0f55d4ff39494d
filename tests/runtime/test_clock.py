"""Tests for clock providers."""

from datetime import datetime, timezone

import pytest

from ingest_initiator.runtime.clock import Clock, FixedClock, MasterClock


def test_master_clock_is_aware():
    now = MasterClock().now_utc()
    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == 0


def test_fixed_clock_converts_to_utc(tz):
    clock = FixedClock(datetime(2012, 1, 28, 3, 0, tzinfo=tz))
    assert clock.now_utc() == datetime(2012, 1, 28, 2, 0, tzinfo=timezone.utc)
    assert clock.now_local(tz).hour == 3


def test_fixed_clock_set(tz):
    clock = FixedClock(datetime(2012, 1, 28, 3, 0, tzinfo=tz))
    clock.set(datetime(2012, 1, 29, 3, 0, tzinfo=tz))
    assert clock.now_local(tz).day == 29


def test_fixed_clock_rejects_naive():
    with pytest.raises(ValueError):
        FixedClock(datetime(2012, 1, 28, 3, 0))


def test_clocks_satisfy_protocol(tz):
    assert isinstance(MasterClock(), Clock)
    assert isinstance(FixedClock(datetime(2012, 1, 28, tzinfo=tz)), Clock)
