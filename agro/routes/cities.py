"""Municipality catalog routes (read-only)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agro.database import get_db
from agro.models.enums import BrazilianState
from agro.schemas.city import CityListRead, CityRead
from agro.services.city_service import CityService

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=CityListRead)
async def list_cities(
	state: BrazilianState | None = None,
	name: str | None = Query(default=None, min_length=1, max_length=255),
	limit: int = Query(default=100, ge=1, le=1000),
	db: AsyncSession = Depends(get_db),
) -> CityListRead:
	cities = await CityService(db).list_cities(state=state, name_prefix=name, limit=limit)
	return CityListRead(items=[CityRead.model_validate(city) for city in cities])
