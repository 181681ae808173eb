"""Tests for the gallon-logger CLI."""

import pytest
from typer.testing import CliRunner

from gallon_logger import __version__
from gallon_logger.cli import app

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Working directory with no repo config and no GALLON_LOGGER_* env."""
    for name in ("GALLON_LOGGER_DATA_PATH", "GALLON_LOGGER_OPERATOR", "GALLON_LOGGER_APP_ID"):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'spray-job'\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_args(workdir):
    return ["--data", str(workdir / "data"), "--operator", "op-1"]


@pytest.fixture
def initialized(cli_args):
    result = runner.invoke(app, ["init", *cli_args])
    assert result.exit_code == 0, result.output
    return cli_args


def _apply(args, road="Elk", gallons="50"):
    return runner.invoke(
        app,
        ["apply", "--road", road, "--gallons", gallons, "-c", "Milestone 2.5 Gal=120", "--weather", "Sunny", *args],
    )


def test_init_creates_data_directory(workdir, cli_args):
    result = runner.invoke(app, ["init", *cli_args])

    assert result.exit_code == 0
    assert "System Ready" in result.output
    assert (workdir / "data" / "state" / "gallon_logs.sqlite").exists()
    assert (workdir / "data" / "config.toml").exists()


def test_init_is_idempotent(initialized):
    result = runner.invoke(app, ["init", *initialized])

    assert result.exit_code == 0
    assert "already exist" in result.output


def test_commands_require_init(cli_args):
    result = runner.invoke(app, ["status", *cli_args])

    assert result.exit_code == 1
    assert "gallon-logger init" in result.output


def test_commands_require_operator(initialized, workdir):
    result = runner.invoke(app, ["status", "--data", str(workdir / "data")])

    assert result.exit_code == 1
    assert "No operator set" in result.output


def test_corrupt_database_is_reported(initialized, workdir):
    (workdir / "data" / "state" / "gallon_logs.sqlite").write_bytes(b"not a database" * 100)

    result = runner.invoke(app, ["status", *initialized])

    assert result.exit_code == 1
    assert "Could not reach the log database." in result.output
    assert isinstance(result.exception, SystemExit)


def test_invalid_env_value_is_reported(cli_args, monkeypatch):
    monkeypatch.setenv("GALLON_LOGGER_DEFAULT_CAPACITY", "lots")

    result = runner.invoke(app, ["init", *cli_args])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "GALLON_LOGGER_DEFAULT_CAPACITY" in result.output
    assert isinstance(result.exception, SystemExit)


def test_apply_and_status(initialized):
    result = _apply(initialized)

    assert result.exit_code == 0, result.output
    assert "Logged 50.00 gallons for Elk." in result.output
    assert "0.2000 oz/gal" in result.output

    result = runner.invoke(app, ["status", *initialized])
    assert result.exit_code == 0
    assert "550 gal" in result.output
    assert "Sunny" in result.output


def test_apply_validation_failure(initialized):
    result = _apply(initialized, "Elk", "0")

    assert result.exit_code == 1
    assert "Please enter a valid amount of Gallons Used." in result.output


def test_apply_without_chemicals_fails(initialized):
    result = runner.invoke(app, ["apply", "--road", "Elk", "--gallons", "50", "--weather", "Sunny", *initialized])

    assert result.exit_code == 1
    assert "at least one chemical" in result.output


def test_apply_rejects_malformed_chemical(initialized):
    result = runner.invoke(
        app, ["apply", "--road", "Elk", "--gallons", "50", "-c", "Vista", "--weather", "Sunny", *initialized]
    )

    assert result.exit_code != 0


def test_refill_is_capped(initialized):
    _apply(initialized, "Elk", "20")

    result = runner.invoke(app, ["refill", "--gallons", "50", *initialized])

    assert result.exit_code == 0, result.output
    assert "Refilled tank by 20.00 gallons" in result.output
    assert "capped from 50.00" in result.output


def test_refill_full_tank(initialized):
    result = runner.invoke(app, ["refill", "--gallons", "10", *initialized])

    assert result.exit_code == 1
    assert "Tank is already full" in result.output


def test_history(initialized):
    _apply(initialized, "Elk", "50")
    _apply(initialized, "Moose", "30")

    result = runner.invoke(app, ["history", *initialized])

    assert result.exit_code == 0
    assert "Elk" in result.output
    assert "Moose" in result.output


def test_report_to_directory(initialized, workdir):
    _apply(initialized, "Elk", "50")
    runner.invoke(app, ["refill", "--gallons", "20", *initialized])
    out_dir = workdir / "reports"
    out_dir.mkdir()

    result = runner.invoke(app, ["report", "--out", str(out_dir), *initialized])

    assert result.exit_code == 0, result.output
    written = list(out_dir.glob("Gallon_Log_Report_*.txt"))
    assert len(written) == 1
    text = written[0].read_text(encoding="utf-8")
    assert "ENTRY #1" in text
    assert "REFILL #1" in text
    assert "User ID: op-1" in text


def test_report_empty_history(initialized):
    result = runner.invoke(app, ["report", *initialized])

    assert result.exit_code == 0
    assert "No history logs to export." in result.output


def test_reset(initialized):
    _apply(initialized, "Elk", "50")
    runner.invoke(app, ["refill", "--gallons", "20", *initialized])

    result = runner.invoke(app, ["reset", "--yes", *initialized])

    assert result.exit_code == 0, result.output
    assert "History cleared (2 entries)" in result.output

    result = runner.invoke(app, ["status", *initialized])
    assert "600 gal" in result.output


def test_reset_cancelled(initialized):
    _apply(initialized, "Elk", "50")

    result = runner.invoke(app, ["reset", *initialized], input="n\n")

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert "550 gal" in runner.invoke(app, ["status", *initialized]).output


def test_roads_filter():
    result = runner.invoke(app, ["roads", "elk"])

    assert result.exit_code == 0
    assert "Elk" in result.output.splitlines()


def test_chemicals_no_match():
    result = runner.invoke(app, ["chemicals", "zzz-not-a-product"])

    assert result.exit_code == 0
    assert "No matching chemicals" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
