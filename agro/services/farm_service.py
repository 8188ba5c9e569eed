"""Farm CRUD service."""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agro.models import City, Farm, Producer
from agro.models.enums import BrazilianState
from agro.repositories import Repository
from agro.schemas.farm import FarmCreate


class FarmService:
	"""Service for farm creation and lookup."""

	def __init__(self, db: AsyncSession):
		self.db = db
		self.farms = Repository(db, Farm)

	async def create_farm(self, payload: FarmCreate) -> Farm:
		if await self.db.get(Producer, payload.producer_id) is None:
			raise LookupError(f"Producer {payload.producer_id} not found")
		if not await self._city_in_state(payload.city, payload.state):
			raise ValueError(f"City {payload.city!r} is not a municipality of {payload.state}")
		return await self.farms.create(**payload.model_dump())

	async def _city_in_state(self, city: str, state: BrazilianState) -> bool:
		stmt = select(func.count()).select_from(City).where(
			City.state == state,
			func.lower(City.name) == city.strip().lower(),
		)
		result = await self.db.execute(stmt)
		return result.scalar_one() > 0

	async def count_farms(
		self,
		*,
		state: BrazilianState | None = None,
		producer_id: uuid.UUID | None = None,
	) -> int:
		filters = {"state": state, "producer_id": producer_id}
		return await self.farms.count(**{key: value for key, value in filters.items() if value is not None})

	async def list_farms(
		self,
		*,
		state: BrazilianState | None = None,
		producer_id: uuid.UUID | None = None,
		limit: int = 50,
		offset: int = 0,
	) -> list[Farm]:
		stmt = select(Farm).order_by(Farm.name, Farm.id).limit(limit).offset(offset)
		if state is not None:
			stmt = stmt.where(Farm.state == state)
		if producer_id is not None:
			stmt = stmt.where(Farm.producer_id == producer_id)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def get_farm(self, farm_id: uuid.UUID) -> Farm:
		rows = await self.db.execute(select(Farm).where(Farm.id == farm_id))
		farm = rows.scalar_one_or_none()
		if farm is None:
			raise LookupError(f"Farm {farm_id} not found")
		return farm
