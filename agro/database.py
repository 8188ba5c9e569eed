"""Async SQLAlchemy engine, session factory, and the FastAPI session dependency."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event, inspect
from sqlalchemy.ext.asyncio import (
	AsyncEngine,
	AsyncSession,
	async_sessionmaker,
	create_async_engine,
)

from agro.config import get_settings


def create_engine_for(url: str, *, echo: bool = False) -> AsyncEngine:
	"""Create an async engine; SQLite engines get transactional DDL and FK enforcement."""
	engine = create_async_engine(url, echo=echo)
	if engine.dialect.name == "sqlite":
		_install_sqlite_hooks(engine)
	return engine


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
	# The sqlite3 driver only opens transactions before DML, so CREATE/DROP would
	# autocommit. Take over BEGIN so a schema batch commits or rolls back as one.
	@event.listens_for(engine.sync_engine, "connect")
	def _on_connect(dbapi_connection: Any, _record: Any) -> None:
		dbapi_connection.isolation_level = None
		cursor = dbapi_connection.cursor()
		cursor.execute("PRAGMA foreign_keys=ON")
		cursor.close()

	@event.listens_for(engine.sync_engine, "begin")
	def _on_begin(connection: Any) -> None:
		connection.exec_driver_sql("BEGIN")


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
	return async_sessionmaker(bind, expire_on_commit=False)


async def has_table(session: AsyncSession, table_name: str) -> bool:
	"""Return whether ``table_name`` exists in the store behind ``session``."""
	connection = await session.connection()
	return await connection.run_sync(
		lambda sync_connection: inspect(sync_connection).has_table(table_name)
	)


_settings = get_settings()
engine = create_engine_for(_settings.database_url, echo=_settings.database_echo)
async_session_factory = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
	"""Request-scoped session: commit on success, roll back on any error."""
	async with async_session_factory() as session:
		try:
			yield session
			await session.commit()
		except Exception:
			await session.rollback()
			raise
