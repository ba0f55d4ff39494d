"""
Application usecases.

CLI commands call functions from here rather than wiring runtime modules
themselves.
"""

from . import initiate_ingest  # noqa: I001
