"""
Ingest initiator for the YouSee TV archive.

Infers the hourly archive files to download from recurring channel archive
requests and decides per file whether its ingest workflow should start.
"""

__version__ = "0.1.0"
