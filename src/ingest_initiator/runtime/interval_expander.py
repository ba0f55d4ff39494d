"""
Interval expansion: from recurring recording windows to hourly archive files.

The archive stores one file per channel per whole hour, so every request is
widened to whole hours:

    Request  dr1 14:30-15:30
    Files    dr1 14:00-15:00, dr1 15:00-16:00

File boundaries are wall-clock hours in the archive zone, but every file
lasts one real hour: on daylight saving days the skipped hour has no file and
a file starting in the repeated hour ends at the same wall-clock time.

Pure functions apart from the injected channel mapper. Output is sorted and
free of duplicates whatever the order of the input requests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from ..domain.interfaces import ChannelMapper
from ..domain.models import IngestCandidate, RecordingWindowRequest
from ..infra.exceptions import InvalidRecordingWindow
from .naming import yousee_filename

logger = logging.getLogger(__name__)

FILE_DURATION = timedelta(hours=1)


def iter_days(from_date: date, to_date: date) -> Iterator[date]:
    """Every calendar day in ``[from_date, to_date]``."""
    day = from_date
    while day <= to_date:
        yield day
        day += timedelta(days=1)


def is_request_valid(request: RecordingWindowRequest, day: date) -> bool:
    """True if ``day`` lies inside the request's validity period (both ends inclusive)."""
    return request.from_date <= day <= request.to_date


def is_request_active(request: RecordingWindowRequest, day: date) -> bool:
    """True if the request records on ``day``: valid and the weekday is covered."""
    if not is_request_valid(request, day):
        return False
    return request.weekday_coverage.covers(day.isoweekday())


def hour_range(request: RecordingWindowRequest) -> range:
    """Hours of the day whose files cover the request's daily window.

    The start hour is floored; the end hour is rounded up when ``to_time``
    has minutes, so a partial last hour is still fetched.

    Raises:
        InvalidRecordingWindow: If the window crosses midnight
    """
    if request.from_time > request.to_time:
        raise InvalidRecordingWindow(
            f"Request {request.id} on '{request.sb_channel_id}' crosses midnight "
            f"({request.from_time:%H:%M}-{request.to_time:%H:%M}); not supported"
        )
    from_hour = request.from_time.hour
    to_hour = request.to_time.hour
    if request.to_time.minute != 0:
        to_hour += 1
    return range(from_hour, to_hour)


def hour_start(day: date, hour: int, tz: tzinfo) -> datetime | None:
    """Start of the file for ``hour`` on ``day``, or None if that wall-clock hour does not exist.

    On the spring-forward day the skipped hour has no file. On the fall-back
    day the repeated hour resolves to its first occurrence.
    """
    start = datetime.combine(day, time(hour), tzinfo=tz)
    roundtrip = start.astimezone(timezone.utc).astimezone(tz)
    if roundtrip.replace(tzinfo=None) != start.replace(tzinfo=None):
        return None
    return start


def hour_end(start: datetime) -> datetime:
    """One real hour after ``start``, in the same zone."""
    return (start.astimezone(timezone.utc) + FILE_DURATION).astimezone(start.tzinfo)


def candidates_for_day(
    request: RecordingWindowRequest,
    day: date,
    channel_mapper: ChannelMapper,
    *,
    tz: tzinfo,
) -> set[IngestCandidate]:
    """Hourly candidates for one request on one day (empty if not active)."""
    if not is_request_active(request, day):
        return set()

    candidates: set[IngestCandidate] = set()
    for hour in hour_range(request):
        start = hour_start(day, hour, tz)
        if start is None:
            logger.debug("Skipping %02d:00 on %s: not a local time in %s", hour, day, tz)
            continue
        end = hour_end(start)
        # The mapping may change over time, so it is resolved per file
        yousee_channel_id = channel_mapper.resolve(request.sb_channel_id, start.date())
        candidates.add(
            IngestCandidate(
                start_time=start,
                yousee_filename=yousee_filename(yousee_channel_id, start, end),
                yousee_channel_id=yousee_channel_id,
                sb_channel_id=request.sb_channel_id,
                end_time=end,
            )
        )
    return candidates


def expand(
    requests: Iterable[RecordingWindowRequest],
    from_date: date,
    to_date: date,
    channel_mapper: ChannelMapper,
    *,
    tz: tzinfo,
) -> list[IngestCandidate]:
    """Expand requests into the sorted hourly files for ``[from_date, to_date]``.

    Overlapping requests on the same channel collapse into one file per hour.

    Raises:
        InvalidRecordingWindow: If any request's window crosses midnight
        MappingResolutionError: Propagated from the channel mapper
    """
    requests = list(requests)
    logger.debug(
        "Inferring files to ingest: %d requests, from %s to %s", len(requests), from_date, to_date
    )
    # Fail fast on unsupported windows before any mapping lookups happen
    for request in requests:
        hour_range(request)

    files: set[IngestCandidate] = set()
    for day in iter_days(from_date, to_date):
        for request in requests:
            files |= candidates_for_day(request, day, channel_mapper, tz=tz)

    result = sorted(files)
    logger.debug("Inferred %d files to ingest", len(result))
    return result
