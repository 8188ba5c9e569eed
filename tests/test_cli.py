from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from structlog.testing import capture_logs

import agro.cli as cli_module
from agro.cli import cli
from agro.config import SeedLocale, SeedScale
from agro.migrations import MIGRATIONS
from agro.seeds import SeedReport


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> Iterator[CliRunner]:
    monkeypatch.setattr(cli_module, "configure_structured_logging", lambda settings: None)
    # Keep log lines out of the captured command output.
    with capture_logs():
        yield CliRunner()


@pytest.fixture
def database_args(tmp_path: Path) -> list[str]:
    return ["--database-url", f"sqlite+aiosqlite:///{tmp_path / 'cli' / 'agro.db'}"]


def test_migrate_status_and_revert(runner: CliRunner, database_args: list[str]) -> None:
    names = [change.name for change in MIGRATIONS]

    migrated = runner.invoke(cli, [*database_args, "migrate"])
    assert migrated.exit_code == 0, migrated.output
    assert migrated.output.splitlines() == [f"applied  {name}" for name in names]

    again = runner.invoke(cli, [*database_args, "migrate"])
    assert again.output.strip() == "Schema is up to date."

    reverted = runner.invoke(cli, [*database_args, "revert"])
    assert reverted.exit_code == 0, reverted.output
    assert reverted.output.strip() == f"reverted {names[-1]}"

    status = runner.invoke(cli, [*database_args, "status"])
    assert status.output.splitlines() == [
        f"applied  {names[0]}",
        f"applied  {names[1]}",
        f"pending  {names[2]}",
    ]


def test_revert_unknown_name_fails(runner: CliRunner, database_args: list[str]) -> None:
    result = runner.invoke(cli, [*database_args, "revert", "--name", "1700000000000_missing"])

    assert result.exit_code == 1
    assert "Unknown migration" in result.output


def test_seed_passes_options_through(
    runner: CliRunner,
    database_args: list[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: dict[str, Any] = {}

    async def fake_seed_database(settings: Any, session_factory: Any) -> SeedReport:
        captured["settings"] = settings
        return SeedReport(cities=9, producers=30, farms=60, harvests=2, skipped_stages=["cities"])

    monkeypatch.setattr(cli_module, "seed_database", fake_seed_database)

    result = runner.invoke(
        cli,
        [*database_args, "seed", "--scale", "small", "--locale", "en_US", "--seed", "42", "--no-migrate"],
    )

    assert result.exit_code == 0, result.output
    settings = captured["settings"]
    assert settings.seed_database is True
    assert settings.seed_scale == SeedScale.small
    assert settings.seed_locale == SeedLocale.english
    assert settings.seed_random_seed == 42
    assert "producers     30" in result.output
    assert "skipped stages: cities" in result.output


def test_seed_on_uninitialised_store_reports_skip(
    runner: CliRunner,
    database_args: list[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def fake_seed_database(settings: Any, session_factory: Any) -> SeedReport:
        return SeedReport(skipped=True)

    monkeypatch.setattr(cli_module, "seed_database", fake_seed_database)

    result = runner.invoke(cli, [*database_args, "seed", "--no-migrate"])

    assert result.exit_code == 0
    assert "Seeding skipped" in result.output
