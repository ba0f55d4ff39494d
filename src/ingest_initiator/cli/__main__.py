#!/usr/bin/env python3
"""
CLI entry point for ingest_initiator.cli module.

This allows running: python -m ingest_initiator.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
