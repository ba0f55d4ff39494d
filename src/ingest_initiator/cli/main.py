"""
Command-line interface for the ingest initiator, built with Typer.

Typical nightly invocation, piping the download list to the downloader:

    ingest-initiator initiate --date 2012-01-28 --state-snapshot states.json > downloads.json

Log lines go to stderr as JSON; only the download list is written to stdout.
"""

from __future__ import annotations

import json
import sys
from datetime import date, datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.memory import InMemoryWorkflowStateLookup, load_workflow_state_snapshot
from ..infra.db import get_engine, get_sessionmaker
from ..infra.exceptions import IngestInitiatorError
from ..infra.logging import configure_logging
from ..infra.repositories import SqlChannelMapper, SqlRequestStore
from ..infra.settings import Settings, load_settings
from ..infra.uow import session
from ..planning.download_list_writer import write_download_list
from ..runtime.clock import MasterClock
from ..runtime.interval_expander import expand
from ..runtime.naming import format_timestamp, sb_file_id
from ..usecases.initiate_ingest import IngestInitiator

app = typer.Typer(help="YouSee archive ingest initiator")

SB_TIME_FORMAT = "%Y-%m-%d-%H.%M.%S"


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _parse_date(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD", param_hint=option)


def _parse_aware(value: str, option: str, settings: Settings) -> datetime:
    """Parse ISO-8601; naive values are taken as archive-local time."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid timestamp '{value}'. Use ISO-8601", param_hint=option)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=settings.tzinfo)
    return parsed


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    database_url: str | None = typer.Option(
        None, "--database-url", help="Request store database URL (overrides DATABASE_URL)"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """Infer the archive files to download and gate re-ingestion on workflow state."""
    overrides: dict[str, object] = {}
    if database_url:
        overrides["database_url"] = database_url
    if log_level:
        overrides["log_level"] = log_level
    try:
        settings = load_settings(**overrides)
    except IngestInitiatorError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@app.command("initiate")
def initiate(
    ctx: typer.Context,
    target_date: str | None = typer.Option(
        None, "--date", help="Last day of the download period (YYYY-MM-DD, default today)"
    ),
    days_to_keep: int | None = typer.Option(
        None, "--days-to-keep", min=1, help="Override YOUSEE_RECORDINGS_DAYS_TO_KEEP"
    ),
    state_snapshot: Path | None = typer.Option(
        None, "--state-snapshot", help="JSON export of workflow states (default: none known)"
    ),
    now: str | None = typer.Option(
        None, "--now", help="Reference time for the workflow gate (ISO-8601, default now)"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
):
    """Write the download list for the files whose ingest should start."""
    settings = _settings(ctx)
    clock = MasterClock()
    day = (
        _parse_date(target_date, "--date")
        if target_date
        else clock.now_local(settings.tzinfo).date()
    )
    reference_time = _parse_aware(now, "--now", settings) if now else None

    try:
        lookup = (
            load_workflow_state_snapshot(state_snapshot)
            if state_snapshot
            else InMemoryWorkflowStateLookup()
        )
        factory = get_sessionmaker(get_engine(settings.database_url, echo=settings.echo_sql))
        with session(factory) as db:
            initiator = IngestInitiator(
                settings=settings,
                request_store=SqlRequestStore(db),
                channel_mapper=SqlChannelMapper(db),
                workflow_states=lookup,
                clock=clock,
            )
            selected = initiator.run(day, days_to_keep, reference_time=reference_time)
    except IngestInitiatorError as e:
        _fail(str(e))

    # Only a completed run touches the output file
    if output:
        with output.open("w", encoding="utf-8") as stream:
            write_download_list(selected, stream)
    else:
        write_download_list(selected, sys.stdout)


@app.command("expand")
def expand_requests(
    ctx: typer.Context,
    from_date: str = typer.Option(..., "--from", help="First day (YYYY-MM-DD)"),
    to_date: str = typer.Option(..., "--to", help="Last day (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List every hourly file the stored requests cover, without workflow gating."""
    settings = _settings(ctx)
    start = _parse_date(from_date, "--from")
    end = _parse_date(to_date, "--to")
    if start > end:
        raise typer.BadParameter("--from must be on or before --to", param_hint="--from")

    try:
        factory = get_sessionmaker(get_engine(settings.database_url, echo=settings.echo_sql))
        with session(factory) as db:
            requests = SqlRequestStore(db).get_valid_requests(start, end)
            files = expand(requests, start, end, SqlChannelMapper(db), tz=settings.tzinfo)
    except IngestInitiatorError as e:
        _fail(str(e))

    if json_output:
        payload = {
            "status": "ok",
            "total": len(files),
            "files": [
                {
                    "file": f.yousee_filename,
                    "sb_file_id": sb_file_id(f.sb_channel_id, f.start_time, f.end_time),
                    "start": f.start_time.isoformat(),
                    "end": f.end_time.isoformat(),
                }
                for f in files
            ],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"Files {start.isoformat()} to {end.isoformat()}")
    table.add_column("Start", style="green")
    table.add_column("SB", style="cyan")
    table.add_column("YouSee", style="cyan")
    table.add_column("File", style="blue", no_wrap=True)
    for f in files:
        table.add_row(
            format_timestamp(f.start_time), f.sb_channel_id, f.yousee_channel_id, f.yousee_filename
        )
    Console().print(table)
    typer.echo(f"Total: {len(files)} files")


@app.command("sb-file-id")
def print_sb_file_id(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="SB channel id, e.g. dr1"),
    start: str = typer.Argument(..., help="Start, YYYY-MM-DD-HH.MM.SS (archive local time)"),
    end: str = typer.Argument(..., help="End, YYYY-MM-DD-HH.MM.SS (archive local time)"),
):
    """Print the SB file id used as workflow entity for one hourly file."""
    settings = _settings(ctx)
    try:
        start_dt = datetime.strptime(start, SB_TIME_FORMAT).replace(tzinfo=settings.tzinfo)
        end_dt = datetime.strptime(end, SB_TIME_FORMAT).replace(tzinfo=settings.tzinfo)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    typer.echo(sb_file_id(channel, start_dt, end_dt))


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
