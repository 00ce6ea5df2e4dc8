"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from poolgen._version import get_version
from poolgen.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(fixtures_dir: Path) -> str:
    return str(fixtures_dir / "poolgen.toml")


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"poolgen {get_version()}" in result.output


def test_generate_command(cli_runner: CliRunner, config_file: str, tmp_path: Path):
    """Test generate command writes one file per entity."""
    result = cli_runner.invoke(
        app, ["generate", "--config", config_file, "--output", str(tmp_path)]
    )

    assert result.exit_code == 0
    assert f"Generated: {tmp_path / 'partner.go'}" in result.output
    assert f"Generated: {tmp_path / 'user.go'}" in result.output
    assert "2 file(s) generated, 0 error(s)" in result.output
    assert (tmp_path / "user.go").exists()


def test_generate_with_workers_and_clean(cli_runner: CliRunner, config_file: str, tmp_path: Path):
    (tmp_path / "helpers.go").write_text("package pool\n")

    result = cli_runner.invoke(
        app,
        ["generate", "-c", config_file, "-o", str(tmp_path), "--workers", "2", "--clean"],
    )

    assert result.exit_code == 0
    assert "Keeping hand-written file helpers.go" in result.output
    assert (tmp_path / "partner.go").exists()


def test_generate_with_explicit_inputs(cli_runner: CliRunner, fixtures_dir: Path, tmp_path: Path):
    """Test inputs given on the command line, without a config file."""
    result = cli_runner.invoke(
        app,
        [
            "generate",
            "--config",
            str(tmp_path / "missing.toml"),
            "--schema",
            str(fixtures_dir / "schema.json"),
            "--metadata",
            str(fixtures_dir / "methods.json"),
            "--output",
            str(tmp_path / "pool"),
        ],
    )

    assert result.exit_code == 0
    assert (tmp_path / "pool" / "partner.go").exists()


def test_generate_reports_entity_errors(cli_runner: CliRunner, fixtures_dir: Path, tmp_path: Path):
    """Test a failing entity gives exit code 1 but the others are written."""
    entries = json.loads((fixtures_dir / "methods.json").read_text())["methods"]
    metadata = tmp_path / "methods.json"
    metadata.write_text(json.dumps([e for e in entries if e["entity"] != "User"]))

    result = cli_runner.invoke(
        app,
        [
            "generate",
            "--schema",
            str(fixtures_dir / "schema.json"),
            "--metadata",
            str(metadata),
            "--output",
            str(tmp_path / "pool"),
        ],
    )

    assert result.exit_code == 1
    assert "Error: User: User.HasGroup" in result.output
    assert "1 file(s) generated, 1 error(s)" in result.output
    assert (tmp_path / "pool" / "partner.go").exists()


def test_generate_missing_schema(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(
        app, ["generate", "--schema", str(tmp_path / "nope.json"), "-o", str(tmp_path)]
    )

    assert result.exit_code == 1
    assert "File not found" in result.output


def test_describe_lists_entities(cli_runner: CliRunner, config_file: str):
    result = cli_runner.invoke(app, ["describe", "--config", config_file])

    assert result.exit_code == 0
    assert result.output.split() == ["Partner", "User"]


def test_describe_entity(cli_runner: CliRunner, config_file: str):
    result = cli_runner.invoke(app, ["describe", "Partner", "--config", config_file])

    assert result.exit_code == 0
    descriptor = json.loads(result.output)
    assert descriptor["name"] == "Partner"
    assert descriptor["deps"][0] == "github.com/npiganeau/yep/yep/models"


def test_describe_unknown_entity(cli_runner: CliRunner, config_file: str):
    result = cli_runner.invoke(app, ["describe", "Ghost", "--config", config_file])

    assert result.exit_code == 1
    assert "Entity not found in registry" in result.output


def test_version_read_from_project_file():
    assert get_version() == "0.3.0"
