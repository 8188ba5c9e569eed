"""``agro-admin``: migration and seeding commands for operators."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click
from sqlalchemy.ext.asyncio import AsyncEngine

from agro.config import SeedLocale, SeedScale, Settings, get_settings
from agro.database import create_engine_for, create_session_factory
from agro.errors import AgroError
from agro.logging import configure_structured_logging
from agro.migrations import MigrationRunner
from agro.seeds import seed_database

T = TypeVar("T")


def _run(settings: Settings, action: Callable[[AsyncEngine], Awaitable[T]]) -> T:
	"""Run ``action`` against a fresh engine and dispose it afterwards."""

	async def _main() -> T:
		engine = create_engine_for(settings.database_url, echo=settings.database_echo)
		try:
			return await action(engine)
		finally:
			await engine.dispose()

	try:
		return asyncio.run(_main())
	except AgroError as exc:
		raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(package_name="agro-admin")
@click.option(
	"--database-url",
	envvar="DATABASE_URL",
	default=None,
	help="SQLAlchemy URL of the store (default: settings DATABASE_URL).",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
	"""agro-admin - schema migrations and reference-data seeding."""
	settings = get_settings()
	if database_url:
		settings = settings.model_copy(update={"database_url": database_url})
	configure_structured_logging(settings)
	ctx.obj = settings


@cli.command()
@click.pass_obj
def migrate(settings: Settings) -> None:
	"""Apply every pending schema migration in one transaction."""
	applied = _run(settings, lambda engine: MigrationRunner(engine).apply())
	if not applied:
		click.echo("Schema is up to date.")
		return
	for name in applied:
		click.echo(f"applied  {name}")


@cli.command()
@click.option("--name", default=None, help="Migration to revert (default: the latest applied).")
@click.pass_obj
def revert(settings: Settings, name: str | None) -> None:
	"""Revert one applied migration (only the latest may be reverted)."""

	async def _revert(engine: AsyncEngine) -> str | None:
		runner = MigrationRunner(engine)
		if name is None:
			return await runner.revert_last()
		await runner.revert(name)
		return name

	reverted = _run(settings, _revert)
	if reverted is None:
		click.echo("Nothing to revert.")
	else:
		click.echo(f"reverted {reverted}")


@cli.command()
@click.pass_obj
def status(settings: Settings) -> None:
	"""Show applied and pending migrations."""

	async def _status(engine: AsyncEngine) -> tuple[list[str], list[str]]:
		runner = MigrationRunner(engine)
		applied = await runner.applied()
		pending = [change.name for change in await runner.pending()]
		return applied, pending

	applied, pending = _run(settings, _status)
	for name in applied:
		click.echo(f"applied  {name}")
	for name in pending:
		click.echo(f"pending  {name}")
	if not applied and not pending:
		click.echo("No migrations defined.")


@cli.command()
@click.option(
	"--scale",
	type=click.Choice([scale.value for scale in SeedScale]),
	default=None,
	help="Dataset volume preset (default: settings SEED_SCALE).",
)
@click.option(
	"--locale",
	type=click.Choice([locale.value for locale in SeedLocale]),
	default=None,
	help="Locale for generated names (default: settings SEED_LOCALE).",
)
@click.option("--seed", "random_seed", type=int, default=None, help="Random seed for a reproducible dataset.")
@click.option("--migrate/--no-migrate", default=True, show_default=True, help="Apply pending migrations first.")
@click.pass_obj
def seed(
	settings: Settings,
	scale: str | None,
	locale: str | None,
	random_seed: int | None,
	migrate: bool,
) -> None:
	"""Seed the reference dataset; stages that already hold rows are skipped."""
	update: dict[str, Any] = {"seed_database": True}
	if scale is not None:
		update["seed_scale"] = SeedScale(scale)
	if locale is not None:
		update["seed_locale"] = SeedLocale(locale)
	if random_seed is not None:
		update["seed_random_seed"] = random_seed
	settings = settings.model_copy(update=update)

	async def _seed(engine: AsyncEngine):
		if migrate:
			await MigrationRunner(engine).apply()
		return await seed_database(settings, create_session_factory(engine))

	report = _run(settings, _seed)
	if report.skipped:
		click.echo("Seeding skipped: store is not initialised (run `agro-admin migrate`).")
		return

	for stage in ("cities", "producers", "farms", "harvests", "farm_harvests", "crops"):
		click.echo(f"{stage:<14}{getattr(report, stage)}")
	if report.skipped_stages:
		click.echo(f"skipped stages: {', '.join(report.skipped_stages)}")
	if report.failed_regions:
		click.echo(f"failed regions: {', '.join(report.failed_regions)}", err=True)
