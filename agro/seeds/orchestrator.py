"""Dependency-ordered, idempotent seeding of the reference dataset.

Stages run in foreign-key order::

    cities → producers → farms → harvests (+ farm-harvest joins and crops)

Each stage counts its own rows first and is skipped when any exist, so a
restart against a seeded store is a no-op.  The cities stage depends on the
IBGE catalog and isolates failures per region; every other stage is fatal on
error.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any

import structlog
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agro.config import SeedLocale, Settings
from agro.database import has_table
from agro.errors import SeedingError
from agro.models import City, Farm, FarmHarvest, FarmHarvestCrop, Harvest, Producer
from agro.models.enums import BrazilianState
from agro.repositories import Repository
from agro.seeds.constants import (
	COMPANY_PROBABILITY,
	FARM_NAME_PREFIXES,
	MUNICIPALITY_POOL_LIMIT,
	SEED_PROFILES,
	SeedProfile,
)
from agro.seeds.sampler import DistributionSampler
from agro.services.catalog_client import CatalogClient
from agro.validators import only_digits

logger = structlog.get_logger("agro.seed")

DOCUMENT_LOCALE = "pt_BR"
REQUIRED_TABLES = ("cities", "producers", "farms", "harvests", "farm_harvests", "farm_harvest_crops")


@dataclass(frozen=True, slots=True)
class SeedConfig:
	"""Everything a seeding run needs to know, resolved up front."""

	enabled: bool
	profile: SeedProfile
	locale: SeedLocale = SeedLocale.portuguese
	region_delay_seconds: float = 0.1
	regions: tuple[BrazilianState, ...] = tuple(BrazilianState)

	@classmethod
	def from_settings(cls, settings: Settings) -> SeedConfig:
		return cls(
			enabled=settings.seed_database,
			profile=SEED_PROFILES[settings.seed_scale],
			locale=settings.seed_locale,
			region_delay_seconds=settings.seed_region_delay_seconds,
		)


@dataclass
class SeedReport:
	skipped: bool = False
	cities: int = 0
	producers: int = 0
	farms: int = 0
	harvests: int = 0
	farm_harvests: int = 0
	crops: int = 0
	skipped_stages: list[str] = field(default_factory=list)
	failed_regions: list[str] = field(default_factory=list)

	def as_dict(self) -> dict[str, Any]:
		return asdict(self)


def build_faker(locale: SeedLocale = SeedLocale.portuguese, seed: int | None = None) -> Faker:
	"""Faker covering ``locale`` for names plus pt_BR for CPF/CNPJ documents."""
	locales = list(dict.fromkeys([locale.value, DOCUMENT_LOCALE]))
	faker = Faker(locales)
	if seed is not None:
		faker.seed_instance(seed)
	return faker


class SeedOrchestrator:
	def __init__(
		self,
		config: SeedConfig,
		session_factory: async_sessionmaker[AsyncSession],
		catalog: CatalogClient,
		*,
		faker: Faker | None = None,
		sampler: DistributionSampler | None = None,
		today: Callable[[], date] = date.today,
	) -> None:
		self.config = config
		self.session_factory = session_factory
		self.catalog = catalog
		self.faker = faker or build_faker(config.locale)
		self._names = self.faker[config.locale.value]
		self._documents = self.faker[DOCUMENT_LOCALE]
		self.rng = self._names.random
		self.sampler = sampler or DistributionSampler(self.rng)
		self._today = today

	async def run(self) -> SeedReport:
		"""Seed every stage in dependency order; see the module docstring."""
		report = SeedReport()
		if not self.config.enabled:
			logger.info("seeding_disabled")
			report.skipped = True
			return report

		if not await self._store_ready():
			logger.info("seeding_skipped_uninitialized_store", required_tables=REQUIRED_TABLES)
			report.skipped = True
			return report

		logger.info("seeding_started", **asdict(self.config.profile))
		try:
			await self._seed_cities(report)
			await self._seed_producers(report)
			await self._seed_farms(report)
			await self._seed_harvests(report)
		except Exception as exc:
			logger.exception("seeding_failed", error=str(exc))
			raise

		logger.info("seeding_completed", **report.as_dict())
		return report

	async def _store_ready(self) -> bool:
		async with self.session_factory() as session:
			for table in REQUIRED_TABLES:
				if not await has_table(session, table):
					return False
		return True

	def _skip(self, report: SeedReport, stage: str, existing: int) -> None:
		logger.info("seed_stage_skipped", stage=stage, existing_count=existing)
		report.skipped_stages.append(stage)

	# ── Cities ──────────────────────────────────────────────────────────────

	async def _seed_cities(self, report: SeedReport) -> None:
		async with self.session_factory() as session:
			existing = await Repository(session, City).count()
		if existing > 0:
			self._skip(report, "cities", existing)
			return

		regions = self.config.regions
		logger.info("seeding_cities", region_count=len(regions))
		for index, region in enumerate(regions, start=1):
			try:
				municipalities = await self.catalog.fetch_by_region(region)
				async with self.session_factory.begin() as session:
					await Repository(session, City).create_many(
						[
							{"name": item.name, "state": region, "ibge_code": str(item.external_id)}
							for item in municipalities
						]
					)
				report.cities += len(municipalities)
				logger.debug(
					"region_cities_saved",
					region=region,
					progress=f"{index}/{len(regions)}",
					city_count=len(municipalities),
				)
			except Exception as exc:
				# Isolated per region: log, record and continue.
				logger.warning("region_cities_failed", region=region, error=str(exc))
				report.failed_regions.append(region)

			if index < len(regions):
				await asyncio.sleep(self.config.region_delay_seconds)

		logger.info(
			"cities_seeded",
			city_count=report.cities,
			failed_regions=report.failed_regions,
		)

	# ── Producers ───────────────────────────────────────────────────────────

	def _new_document(self, is_company: bool, taken: set[str]) -> str:
		while True:
			raw = self._documents.cnpj() if is_company else self._documents.cpf()
			document = only_digits(raw)
			if document not in taken:
				taken.add(document)
				return document

	async def _seed_producers(self, report: SeedReport) -> None:
		async with self.session_factory.begin() as session:
			repository = Repository(session, Producer)
			existing = await repository.count()
			if existing > 0:
				self._skip(report, "producers", existing)
				return

			taken: set[str] = set()
			rows: list[dict[str, Any]] = []
			for _ in range(self.config.profile.producers):
				is_company = self.rng.random() < COMPANY_PROBABILITY
				rows.append(
					{
						"document": self._new_document(is_company, taken),
						"name": self._names.company() if is_company else self._names.name(),
					}
				)
			producers = await repository.create_many(rows)

		report.producers = len(producers)
		company_count = sum(1 for row in rows if len(row["document"]) == 14)
		logger.info(
			"producers_seeded",
			producer_count=len(producers),
			cpf_count=len(producers) - company_count,
			cnpj_count=company_count,
		)

	# ── Farms ───────────────────────────────────────────────────────────────

	async def _pick_location(
		self,
		cities: Repository[City],
		pools: dict[str, list[City]],
		empty_regions: set[str],
	) -> tuple[str, City]:
		# Regions without municipalities are dropped and redrawn; SeedingError
		# surfaces from the sampler once none are left.
		while True:
			region = self.sampler.sample_region(exclude=empty_regions)
			if region not in pools:
				pools[region] = await cities.find(state=region, limit=MUNICIPALITY_POOL_LIMIT)
			pool = pools[region]
			if pool:
				return region, self.rng.choice(pool)
			logger.warning("region_without_cities", region=region)
			empty_regions.add(region)

	async def _seed_farms(self, report: SeedReport) -> None:
		async with self.session_factory.begin() as session:
			repository = Repository(session, Farm)
			existing = await repository.count()
			if existing > 0:
				self._skip(report, "farms", existing)
				return

			if self.config.profile.farms == 0:
				logger.info("farms_seeded", farm_count=0)
				return

			producers = await Repository(session, Producer).find()
			if not producers:
				raise SeedingError("Cannot seed farms: no producers in the store")

			cities = Repository(session, City)
			pools: dict[str, list[City]] = {}
			empty_regions: set[str] = set()
			prefixes = FARM_NAME_PREFIXES[self.config.locale]
			rows: list[dict[str, Any]] = []
			for _ in range(self.config.profile.farms):
				producer = self.rng.choice(producers)
				region, city = await self._pick_location(cities, pools, empty_regions)
				areas = self.sampler.generate_areas()
				rows.append(
					{
						"name": f"{self.rng.choice(prefixes)} {self._names.last_name()}",
						"city": city.name,
						"state": region,
						"total_area": areas.total_area,
						"arable_area": areas.arable_area,
						"vegetation_area": areas.vegetation_area,
						"producer_id": producer.id,
					}
				)
			farms = await repository.create_many(rows)

		report.farms = len(farms)
		logger.info(
			"farms_seeded",
			farm_count=len(farms),
			state_count=len({row["state"] for row in rows}),
			total_hectares=str(sum((row["total_area"] for row in rows), start=0)),
		)

	# ── Harvests & crops ────────────────────────────────────────────────────

	def _harvest_years(self) -> Sequence[int]:
		current_year = self._today().year
		start_year = current_year - self.config.profile.harvest_years + 1
		return range(start_year, current_year + 1)

	async def _seed_harvests(self, report: SeedReport) -> None:
		async with self.session_factory.begin() as session:
			repository = Repository(session, Harvest)
			existing = await repository.count()
			if existing > 0:
				self._skip(report, "harvests", existing)
				return

			harvests = await repository.create_many(
				[{"year": str(year), "description": f"Safra {year}/{year + 1}"} for year in self._harvest_years()]
			)
			report.harvests = len(harvests)
			logger.info(
				"harvests_seeded",
				harvest_count=len(harvests),
				year_range=f"{harvests[0].year} - {harvests[-1].year}" if harvests else None,
			)
			if not harvests:
				return

			farms = await Repository(session, Farm).find()
			join_rows: list[dict[str, Any]] = []
			for farm in farms:
				selected = self.rng.sample(harvests, self.rng.randint(1, len(harvests)))
				join_rows.extend({"farm_id": farm.id, "harvest_id": harvest.id} for harvest in selected)
			farm_harvests = await Repository(session, FarmHarvest).create_many(join_rows)

			crop_rows = [
				{"farm_harvest_id": farm_harvest.id, "crop_type": crop}
				for farm_harvest in farm_harvests
				for crop in self.sampler.pick_crop_combination()
			]
			crops = await Repository(session, FarmHarvestCrop).create_many(crop_rows)

		report.farm_harvests = len(farm_harvests)
		report.crops = len(crops)
		logger.info(
			"crops_seeded",
			farm_count=len(farms),
			farm_harvest_count=len(farm_harvests),
			crop_count=len(crops),
		)


async def seed_database(
	settings: Settings,
	session_factory: async_sessionmaker[AsyncSession],
	*,
	config: SeedConfig | None = None,
) -> SeedReport:
	"""Build the collaborators from settings and run one seeding pass."""
	config = config or SeedConfig.from_settings(settings)
	async with CatalogClient(
		settings.ibge_api_base_url,
		timeout_seconds=settings.ibge_timeout_seconds,
	) as catalog:
		orchestrator = SeedOrchestrator(
			config,
			session_factory,
			catalog,
			faker=build_faker(config.locale, settings.seed_random_seed),
		)
		return await orchestrator.run()
