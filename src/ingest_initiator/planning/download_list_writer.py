"""
Download list writer.

Renders gated candidates as the JSON document consumed by the downloader:

    {
      "downloads": [
        {
          "fileID": "DR HD_20120915100000_20120915110000.mux",
          "startTime": "20120915100000",
          "endTime": "20120915110000",
          "youseeChannelID": "DR HD",
          "sbChannelID": "drhd"
        }
      ]
    }

Entries keep the order of the candidate sequence.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from ..domain.models import IngestCandidate
from ..shared.schemas import DownloadEntry, DownloadList


def build_download_list(candidates: Iterable[IngestCandidate]) -> DownloadList:
    return DownloadList(downloads=[DownloadEntry.from_candidate(c) for c in candidates])


def render_download_list(candidates: Iterable[IngestCandidate], indent: int | None = 2) -> str:
    """Render the download list document (newline terminated)."""
    document = build_download_list(candidates)
    return document.model_dump_json(by_alias=True, indent=indent) + "\n"


def write_download_list(
    candidates: Iterable[IngestCandidate], stream: TextIO, indent: int | None = 2
) -> None:
    """Write the download list document to ``stream`` and flush it."""
    stream.write(render_download_list(candidates, indent=indent))
    stream.flush()
