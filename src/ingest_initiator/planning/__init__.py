"""Planning artifacts: the download list handed to the downloader."""

from ingest_initiator.planning.download_list_writer import (
    build_download_list,
    render_download_list,
    write_download_list,
)

__all__ = [
    "build_download_list",
    "render_download_list",
    "write_download_list",
]
