"""
Application settings for the ingest initiator.

This module defines all configuration settings using Pydantic BaseSettings.
Values come from the environment or a discovered .env file.
"""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Main application settings using Pydantic BaseSettings."""

    # Database settings (read-only request store and channel mapping)
    database_url: str = Field(default="sqlite:///ingest_initiator.db", alias="DATABASE_URL")
    echo_sql: bool = Field(default=False, alias="ECHO_SQL")

    # Ingest window and workflow gate
    recordings_days_to_keep: int = Field(
        default=28, ge=1, alias="YOUSEE_RECORDINGS_DAYS_TO_KEEP"
    )
    expected_ingest_duration_hours: float = Field(
        default=12, gt=0, alias="EXPECTED_DURATION_OF_FILE_INGEST_PROCESS"
    )
    final_workflow_component_name: str = Field(
        default="Yousee complete workflow final step",
        min_length=1,
        alias="FINAL_WORK_FLOW_COMPONENT_NAME",
    )
    final_workflow_state_name: str = Field(
        default="Completed", min_length=1, alias="FINAL_WORK_FLOW_STATE_NAME"
    )
    archive_timezone: str = Field(default="Europe/Copenhagen", alias="ARCHIVE_TIMEZONE")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    env: str = Field(default="dev", alias="ENV")  # dev|prod|test

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("archive_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @property
    def expected_ingest_duration(self) -> timedelta:
        return timedelta(hours=self.expected_ingest_duration_hours)

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.archive_timezone)


def _resolve_env_file() -> str | None:
    # 1) Explicit override
    explicit = os.getenv("INGEST_INITIATOR_ENV_FILE")
    if explicit and Path(explicit).is_file():
        return explicit

    # 2) CWD .env
    cwd_env = Path.cwd() / ".env"
    if cwd_env.is_file():
        return str(cwd_env)

    # 3) Walk up from this file to find nearest .env
    here = Path(__file__).resolve()
    for parent in here.parents:
        candidate = parent / ".env"
        if candidate.is_file():
            return str(candidate)
    return None


def load_settings(**overrides: object) -> Settings:
    """Build a fresh Settings instance.

    Keyword overrides take precedence over the environment. Validation
    failures surface as ConfigurationError so the run aborts before any
    expansion happens.
    """
    env_file = _resolve_env_file()
    try:
        if env_file:
            return Settings(_env_file=env_file, **overrides)  # type: ignore[call-arg]
        return Settings(**overrides)  # type: ignore[call-arg]
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
