"""Apply and revert schema changes exactly once, tracked in a ledger table."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from agro.errors import MigrationError
from agro.migrations.descriptors import SchemaChange, validate_history
from agro.migrations.versions import MIGRATIONS

LEDGER_TABLE = "migrations"

logger = structlog.get_logger("agro.migrations")


class MigrationRunner:
	"""Runs an ordered schema history against one engine.

	``apply()`` executes every pending change in a single transaction: either
	all of them land together with their ledger rows, or nothing does.
	"""

	def __init__(
		self,
		engine: AsyncEngine,
		migrations: Sequence[SchemaChange] = MIGRATIONS,
	) -> None:
		self.engine = engine
		self.migrations = validate_history(migrations)
		self._by_name = {change.name: change for change in self.migrations}

	def ensure_storage(self) -> Path | None:
		"""Create the directory holding a file-backed SQLite database."""
		url = self.engine.url
		if url.get_backend_name() != "sqlite":
			return None
		database = url.database
		if not database or database == ":memory:" or database.startswith("file:"):
			return None
		directory = Path(database).expanduser().resolve().parent
		if not directory.exists():
			directory.mkdir(parents=True, exist_ok=True)
			logger.info("migration_storage_created", directory=str(directory))
		return directory

	async def applied(self) -> list[str]:
		"""Names recorded in the ledger, in history order."""
		self.ensure_storage()
		async with self.engine.begin() as connection:
			await self._ensure_ledger(connection)
			applied = await self._applied_names(connection)
		return [change.name for change in self.migrations if change.name in applied]

	async def pending(self) -> list[SchemaChange]:
		self.ensure_storage()
		async with self.engine.begin() as connection:
			await self._ensure_ledger(connection)
			applied = await self._applied_names(connection)
		return [change for change in self.migrations if change.name not in applied]

	async def apply(self) -> list[str]:
		"""Apply every pending change; returns the names applied (empty when none)."""
		self.ensure_storage()
		async with self.engine.begin() as connection:
			await self._ensure_ledger(connection)
			applied = await self._applied_names(connection)
			pending = [change for change in self.migrations if change.name not in applied]
			if not pending:
				logger.info("migrations_up_to_date", applied_count=len(applied))
				return []

			logger.info(
				"migrations_pending",
				pending=[change.name for change in pending],
			)
			for change in pending:
				await self._execute(connection, change, change.forward_statements(), "create")
				await connection.execute(
					text(f'INSERT INTO "{LEDGER_TABLE}" ("name", "applied_at") VALUES (:name, :applied_at)'),
					{"name": change.name, "applied_at": datetime.now(UTC).isoformat()},
				)
				logger.info("migration_applied", migration=change.name)

		return [change.name for change in pending]

	async def revert(self, name: str) -> None:
		"""Drop the objects of ``name`` (indexes, then tables) and remove its ledger row.

		Only the most recent applied change may be reverted; later changes can
		depend on the objects this one created.
		"""
		change = self._by_name.get(name)
		if change is None:
			raise MigrationError(f"Unknown migration {name!r}", migration=name)

		self.ensure_storage()
		async with self.engine.begin() as connection:
			await self._ensure_ledger(connection)
			applied = await self._applied_names(connection)
			if name not in applied:
				raise MigrationError(f"Migration {name!r} is not applied", migration=name)

			later = [
				other.name
				for other in self.migrations[self.migrations.index(change) + 1 :]
				if other.name in applied
			]
			if later:
				raise MigrationError(
					f"Cannot revert {name!r} while later migrations are applied: {', '.join(later)}",
					migration=name,
				)

			await self._execute(connection, change, change.reverse_statements(), "drop")
			await connection.execute(
				text(f'DELETE FROM "{LEDGER_TABLE}" WHERE "name" = :name'),
				{"name": name},
			)
		logger.info("migration_reverted", migration=name)

	async def revert_last(self) -> str | None:
		applied = await self.applied()
		if not applied:
			logger.info("migrations_nothing_to_revert")
			return None
		name = applied[-1]
		await self.revert(name)
		return name

	@staticmethod
	async def _ensure_ledger(connection: AsyncConnection) -> None:
		await connection.exec_driver_sql(
			f'CREATE TABLE IF NOT EXISTS "{LEDGER_TABLE}" ('
			'"name" varchar(255) PRIMARY KEY NOT NULL, '
			'"applied_at" datetime NOT NULL)'
		)

	@staticmethod
	async def _applied_names(connection: AsyncConnection) -> set[str]:
		rows = await connection.execute(text(f'SELECT "name" FROM "{LEDGER_TABLE}"'))
		return set(rows.scalars().all())

	@staticmethod
	async def _execute(
		connection: AsyncConnection,
		change: SchemaChange,
		statements: list[tuple[str, str]],
		action: str,
	) -> None:
		for object_name, statement in statements:
			logger.debug("migration_statement", migration=change.name, object=object_name, action=action)
			try:
				await connection.exec_driver_sql(statement)
			except SQLAlchemyError as exc:
				logger.error(
					"migration_statement_failed",
					migration=change.name,
					object=object_name,
					action=action,
					error=str(exc),
				)
				raise MigrationError(
					f"Failed to {action} {object_name!r} in migration {change.name!r}: {exc}",
					migration=change.name,
				) from exc
