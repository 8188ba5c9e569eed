"""Read-only access to the seeded municipality catalog."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agro.models import City
from agro.models.enums import BrazilianState


class CityService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def list_cities(
		self,
		*,
		state: BrazilianState | None = None,
		name_prefix: str | None = None,
		limit: int = 100,
	) -> list[City]:
		stmt = select(City).order_by(City.state, City.name).limit(limit)
		if state is not None:
			stmt = stmt.where(City.state == state)
		if name_prefix:
			stmt = stmt.where(City.name.startswith(name_prefix, autoescape=True))
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())
