"""Producer CRUD service."""

from __future__ import annotations

import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agro.models import Farm, Producer
from agro.repositories import Repository
from agro.schemas.producer import ProducerCreate


class ProducerService:
	"""Service for producer creation, listing and removal."""

	def __init__(self, db: AsyncSession):
		self.db = db
		self.producers = Repository(db, Producer)

	async def create_producer(self, payload: ProducerCreate) -> Producer:
		return await self.producers.create(document=payload.document, name=payload.name)

	async def count_producers(self) -> int:
		return await self.producers.count()

	async def list_producers(self, *, limit: int = 50, offset: int = 0) -> list[tuple[Producer, int]]:
		"""Producers by name, each paired with its farm count."""
		stmt = (
			select(Producer, func.count(Farm.id))
			.outerjoin(Farm, Farm.producer_id == Producer.id)
			.group_by(Producer.id)
			.order_by(Producer.name, Producer.id)
			.limit(limit)
			.offset(offset)
		)
		rows = await self.db.execute(stmt)
		return [(producer, int(farm_count)) for producer, farm_count in rows.all()]

	async def get_producer(self, producer_id: uuid.UUID) -> tuple[Producer, int]:
		producer = await self.db.get(Producer, producer_id)
		if producer is None:
			raise LookupError(f"Producer {producer_id} not found")
		farm_count = await Repository(self.db, Farm).count(producer_id=producer_id)
		return producer, farm_count

	async def delete_producer(self, producer_id: uuid.UUID) -> None:
		# Farms and their harvest rows go with it through ON DELETE CASCADE.
		result = await self.db.execute(delete(Producer).where(Producer.id == producer_id))
		if result.rowcount == 0:
			raise LookupError(f"Producer {producer_id} not found")
