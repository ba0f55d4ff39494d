"""
Custom exceptions for ingest initiator operations.

Every error raised by the initiator derives from IngestInitiatorError. None
of them is downgraded to an empty or partial download list: a run either
completes or fails as a whole.
"""


class IngestInitiatorError(Exception):
    """Base exception for all ingest initiator errors."""

    pass


class ConfigurationError(IngestInitiatorError):
    """Raised when a required configuration value is missing or unparseable."""

    pass


class UnknownCoverageValue(IngestInitiatorError):
    """Raised when a request carries a weekday coverage outside the enumeration."""

    pass


class InvalidRecordingWindow(IngestInitiatorError):
    """Raised when a request's daily window cannot be expanded (e.g. crosses midnight)."""

    pass


class MappingResolutionError(IngestInitiatorError):
    """Raised when no unique YouSee channel mapping exists for a channel and date."""

    pass


class LookupUnavailable(IngestInitiatorError):
    """Raised when the request store or workflow state lookup fails."""

    pass
