"""
Infrastructure layer - database, logging, settings, and technical concerns.

This layer contains infrastructure concerns like read-only database access
for archive requests and channel mappings, logging and configuration.
"""
