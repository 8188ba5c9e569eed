"""Shared pytest fixtures: async test clients, temp SQLite stores, catalog fakes."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterable, Mapping
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agro.database import create_engine_for, create_session_factory, get_db
from agro.errors import CatalogFetchError
from agro.main import app
from agro.migrations import MigrationRunner
from agro.models import City
from agro.models.enums import BrazilianState
from agro.services.catalog_client import CatalogMunicipality


class FakeAsyncSession:
	def __init__(self) -> None:
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock()


class FakeCatalog:
	"""In-memory stand-in for ``CatalogClient``.

	``cities`` maps a region code to municipality names; ids are generated so
	they are unique across regions.  Regions in ``failing`` raise.
	"""

	def __init__(self, cities: Mapping[str, Iterable[str]], failing: Iterable[str] = ()) -> None:
		self.cities = {region: list(names) for region, names in cities.items()}
		self.failing = set(failing)
		self.calls: list[str] = []

	async def fetch_by_region(self, region_code: str) -> list[CatalogMunicipality]:
		self.calls.append(region_code)
		if region_code in self.failing:
			raise CatalogFetchError(region_code, "503 Service Unavailable")
		base = 1_000_000 + 10_000 * len(self.calls)
		return [
			CatalogMunicipality(external_id=base + index, name=name)
			for index, name in enumerate(self.cities.get(region_code, []))
		]


def sqlite_url(path: Path) -> str:
	return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides in API tests."""
	return FakeAsyncSession()


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
	"""Engine over an empty file-backed SQLite store."""
	test_engine = create_engine_for(sqlite_url(tmp_path / "agro.db"))
	yield test_engine
	await test_engine.dispose()


@pytest.fixture
async def migrated_engine(engine: AsyncEngine) -> AsyncEngine:
	await MigrationRunner(engine).apply()
	return engine


@pytest.fixture
def session_factory(migrated_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
	return create_session_factory(migrated_engine)


@pytest.fixture
async def reference_cities(session_factory: async_sessionmaker[AsyncSession]) -> None:
	"""A handful of Mato Grosso and Parana municipalities for farm validation."""
	async with session_factory.begin() as session:
		session.add_all(
			[
				City(name="Sorriso", state=BrazilianState.MT, ibge_code="5107925"),
				City(name="Sinop", state=BrazilianState.MT, ibge_code="5107909"),
				City(name="Cascavel", state=BrazilianState.PR, ibge_code="4104808"),
				City(name="Toledo", state=BrazilianState.PR, ibge_code="4127700"),
			]
		)


@asynccontextmanager
async def _client_without_lifespan() -> AsyncGenerator[AsyncClient, None]:
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	try:
		async with AsyncClient(transport=transport, base_url="http://test") as test_client:
			yield test_client
	finally:
		app.router.lifespan_context = original_lifespan
		app.dependency_overrides.clear()


@pytest.fixture
async def client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and DB dependency mocked."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	async with _client_without_lifespan() as test_client:
		yield test_client


@pytest.fixture
async def db_client(
	session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client backed by a migrated temp SQLite store."""

	async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
		async with session_factory() as session:
			try:
				yield session
				await session.commit()
			except Exception:
				await session.rollback()
				raise

	app.dependency_overrides[get_db] = override_get_db
	async with _client_without_lifespan() as test_client:
		yield test_client
