"""
File naming for archive files.

Two names exist for every hourly file:

* the YouSee file name, as published by the archive:
  ``DR1_20100301000000_20100301010000.mux``
* the SB file id, used as the workflow entity name. It keeps the layout of
  the files recorded by the old DVB capture so both generations sort and
  parse alike:
  ``dr1_yousee.1326114000-2012-01-09-14.00.00_1326117600-2012-01-09-15.00.00_ftp.ts``
"""

from __future__ import annotations

from datetime import datetime

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
SB_TIMESTAMP_FORMAT = "%Y-%m-%d-%H.%M.%S"


def format_timestamp(dt: datetime) -> str:
    """Format as ``yyyyMMddHHmmss`` in the datetime's own wall clock."""
    return dt.strftime(TIMESTAMP_FORMAT)


def yousee_filename(yousee_channel_id: str, start: datetime, end: datetime) -> str:
    return f"{yousee_channel_id}_{format_timestamp(start)}_{format_timestamp(end)}.mux"


def sb_file_id(sb_channel_id: str, start: datetime, end: datetime) -> str:
    """SB file id for the hour ``[start, end)``.

    Each timestamp is written as epoch seconds followed by the local wall
    clock. Both datetimes must be timezone-aware.
    """
    return f"{sb_channel_id}_yousee.{_sb_stamp(start)}_{_sb_stamp(end)}_ftp.ts"


def _sb_stamp(dt: datetime) -> str:
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        raise ValueError("Datetime must be timezone-aware")
    return f"{int(dt.timestamp())}-{dt.strftime(SB_TIMESTAMP_FORMAT)}"
