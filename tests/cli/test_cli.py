"""
CLI tests for the ingest initiator commands.

Each test runs against a throwaway SQLite file seeded with one request:
dr1 on Mondays 08:00-10:00, mapped to YouSee channel DR1.
"""

import json
from datetime import date, time

import pytest
from typer.testing import CliRunner

from ingest_initiator.cli.main import app
from ingest_initiator.domain.entities import ChannelArchiveRequestRow, YouSeeChannelMappingRow
from ingest_initiator.infra.db import Base, get_engine, get_sessionmaker
from ingest_initiator.infra.uow import session

runner = CliRunner()

SNAPSHOT_ENTITY = "dr1_yousee.1267430400-2010-03-01-09.00.00_1267434000-2010-03-01-10.00.00_ftp.ts"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("DATABASE_URL", "ARCHIVE_TIMEZONE", "YOUSEE_RECORDINGS_DAYS_TO_KEEP", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("INGEST_INITIATOR_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'requests.db'}"
    engine = get_engine(url)
    Base.metadata.create_all(engine)
    with session(get_sessionmaker(engine)) as db:
        db.add(
            ChannelArchiveRequestRow(
                id=1,
                sb_channel_id="dr1",
                weekday_coverage="MONDAY",
                from_time=time(8, 0),
                to_time=time(10, 0),
                from_date=date(2010, 1, 1),
                to_date=date(2010, 12, 31),
            )
        )
        db.add(
            YouSeeChannelMappingRow(
                sb_channel_id="dr1",
                yousee_channel_id="DR1",
                from_date=date(2000, 1, 1),
                to_date=date(2099, 12, 31),
            )
        )
    engine.dispose()
    return url


def test_sb_file_id():
    result = runner.invoke(
        app, ["sb-file-id", "dr1", "2012-01-09-14.00.00", "2012-01-09-15.00.00"]
    )
    assert result.exit_code == 0
    assert (
        "dr1_yousee.1326114000-2012-01-09-14.00.00_1326117600-2012-01-09-15.00.00_ftp.ts"
        in result.output
    )


def test_sb_file_id_rejects_bad_timestamp():
    result = runner.invoke(app, ["sb-file-id", "dr1", "2012-01-09 14:00", "2012-01-09-15.00.00"])
    assert result.exit_code != 0


def test_initiate_writes_download_list(database_url, tmp_path):
    out = tmp_path / "downloads.json"
    result = runner.invoke(
        app,
        [
            "--database-url",
            database_url,
            "initiate",
            "--date",
            "2010-03-07",
            "--days-to-keep",
            "7",
            "--now",
            "2010-03-08T12:00:00",
            "--output",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    downloads = json.loads(out.read_text(encoding="utf-8"))["downloads"]
    assert [d["fileID"] for d in downloads] == [
        "DR1_20100301080000_20100301090000.mux",
        "DR1_20100301090000_20100301100000.mux",
    ]
    assert downloads[0]["sbChannelID"] == "dr1"


def test_initiate_skips_completed_files(database_url, tmp_path):
    snapshot = tmp_path / "states.json"
    snapshot.write_text(
        json.dumps(
            [
                {
                    "component": "Yousee complete workflow final step",
                    "stateName": "Completed",
                    "date": "2010-03-02T06:00:00+01:00",
                    "entity": SNAPSHOT_ENTITY,
                }
            ]
        ),
        encoding="utf-8",
    )
    out = tmp_path / "downloads.json"
    result = runner.invoke(
        app,
        [
            "--database-url",
            database_url,
            "initiate",
            "--date",
            "2010-03-07",
            "--days-to-keep",
            "7",
            "--state-snapshot",
            str(snapshot),
            "--now",
            "2010-03-08T12:00:00+01:00",
            "-o",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    downloads = json.loads(out.read_text(encoding="utf-8"))["downloads"]
    assert [d["fileID"] for d in downloads] == ["DR1_20100301080000_20100301090000.mux"]


def test_initiate_outside_request_period_is_empty(database_url, tmp_path):
    out = tmp_path / "downloads.json"
    result = runner.invoke(
        app,
        [
            "--database-url",
            database_url,
            "initiate",
            "--date",
            "2099-03-07",
            "--days-to-keep",
            "7",
            "-o",
            str(out),
        ],
    )
    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8")) == {"downloads": []}


def test_initiate_missing_snapshot_fails(database_url, tmp_path):
    result = runner.invoke(
        app,
        [
            "--database-url",
            database_url,
            "initiate",
            "--date",
            "2010-03-07",
            "--state-snapshot",
            str(tmp_path / "missing.json"),
            "-o",
            str(tmp_path / "downloads.json"),
        ],
    )
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not (tmp_path / "downloads.json").exists()


def test_initiate_rejects_bad_date(database_url):
    result = runner.invoke(app, ["--database-url", database_url, "initiate", "--date", "07-03-2010"])
    assert result.exit_code != 0


def test_expand_json(database_url):
    result = runner.invoke(
        app,
        ["--database-url", database_url, "expand", "--from", "2010-03-01", "--to", "2010-03-14", "--json"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output[result.output.index("{") :])
    assert payload["status"] == "ok"
    assert payload["total"] == 4
    assert payload["files"][1]["sb_file_id"] == SNAPSHOT_ENTITY
    assert payload["files"][2]["file"] == "DR1_20100308080000_20100308090000.mux"


def test_expand_text(database_url):
    result = runner.invoke(
        app, ["--database-url", database_url, "expand", "--from", "2010-03-01", "--to", "2010-03-01"]
    )
    assert result.exit_code == 0, result.output
    assert "DR1_20100301080000_20100301090000.mux" in result.output
    assert "Total: 2 files" in result.output


@pytest.fixture
def unmapped_database_url(tmp_path):
    """A request for tv2, which has no YouSee channel mapping."""
    url = f"sqlite:///{tmp_path / 'unmapped.db'}"
    engine = get_engine(url)
    Base.metadata.create_all(engine)
    with session(get_sessionmaker(engine)) as db:
        db.add(
            ChannelArchiveRequestRow(
                id=1,
                sb_channel_id="tv2",
                weekday_coverage="DAILY",
                from_time=time(8, 0),
                to_time=time(9, 0),
                from_date=date(2010, 1, 1),
                to_date=date(2010, 12, 31),
            )
        )
    engine.dispose()
    return url


def test_expand_unmapped_channel_fails(unmapped_database_url):
    result = runner.invoke(
        app, ["--database-url", unmapped_database_url, "expand", "--from", "2010-03-01", "--to", "2010-03-01"]
    )
    assert result.exit_code == 1
    assert "No YouSee channel mapping for 'tv2'" in result.output


def test_invalid_configuration_exits(monkeypatch):
    monkeypatch.setenv("ARCHIVE_TIMEZONE", "Nowhere/Special")
    result = runner.invoke(app, ["sb-file-id", "dr1", "2012-01-09-14.00.00", "2012-01-09-15.00.00"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_failed_initiate_leaves_no_output_file(unmapped_database_url, tmp_path):
    out = tmp_path / "downloads.json"
    result = runner.invoke(
        app,
        [
            "--database-url",
            unmapped_database_url,
            "initiate",
            "--date",
            "2010-03-07",
            "--days-to-keep",
            "7",
            "-o",
            str(out),
        ],
    )
    assert result.exit_code == 1
    assert "No YouSee channel mapping for 'tv2'" in result.output
    assert not out.exists()


def test_failed_initiate_keeps_previous_output_file(unmapped_database_url, tmp_path):
    out = tmp_path / "downloads.json"
    out.write_text('{"downloads": []}\n', encoding="utf-8")
    result = runner.invoke(
        app,
        ["--database-url", unmapped_database_url, "initiate", "--date", "2010-03-07", "-o", str(out)],
    )
    assert result.exit_code == 1
    assert out.read_text(encoding="utf-8") == '{"downloads": []}\n'
