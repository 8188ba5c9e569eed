"""Generic per-entity persistence: create, count and filtered find."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agro.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)

logger = structlog.get_logger("agro.repositories")


class Repository(Generic[ModelT]):
	"""Create/count/find over one mapped entity, bound to an ``AsyncSession``.

	The repository never commits; transaction boundaries belong to the caller.
	"""

	def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
		self.session = session
		self.model = model

	async def create(self, **fields: Any) -> ModelT:
		instance = self.model(**fields)
		self.session.add(instance)
		await self.session.flush()
		return instance

	async def create_many(self, rows: list[dict[str, Any]]) -> list[ModelT]:
		instances = [self.model(**fields) for fields in rows]
		self.session.add_all(instances)
		await self.session.flush()
		logger.debug("rows_created", model=self.model.__name__, count=len(instances))
		return instances

	async def count(self, **filters: Any) -> int:
		stmt = select(func.count()).select_from(self.model).filter_by(**filters)
		result = await self.session.execute(stmt)
		return int(result.scalar_one())

	async def find(self, *, limit: int | None = None, **filters: Any) -> list[ModelT]:
		stmt = select(self.model).filter_by(**filters)
		if limit is not None:
			stmt = stmt.limit(limit)
		result = await self.session.execute(stmt)
		return list(result.scalars().all())
