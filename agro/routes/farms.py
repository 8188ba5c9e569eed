"""Farm CRUD routes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agro.database import get_db
from agro.models import Farm
from agro.models.enums import BrazilianState
from agro.schemas.farm import FarmCreate, FarmHarvestRead, FarmListRead, FarmRead, HarvestRead
from agro.services.farm_service import FarmService

router = APIRouter(prefix="/farms", tags=["farms"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, IntegrityError):
		return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Farm conflicts with existing data")
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected farm service failure",
	)


def _to_farm_read(farm: Farm, *, with_harvests: bool = True) -> FarmRead:
	harvests: list[FarmHarvestRead] = []
	if with_harvests:
		harvests = [
			FarmHarvestRead(
				harvest=HarvestRead.model_validate(farm_harvest.harvest),
				crops=[crop.crop_type for crop in farm_harvest.crops],
			)
			for farm_harvest in sorted(farm.farm_harvests, key=lambda item: item.harvest.year)
		]
	return FarmRead(
		id=farm.id,
		name=farm.name,
		city=farm.city,
		state=farm.state,
		total_area=farm.total_area,
		arable_area=farm.arable_area,
		vegetation_area=farm.vegetation_area,
		producer_id=farm.producer_id,
		created_at=farm.created_at,
		updated_at=farm.updated_at,
		harvests=harvests,
	)


@router.post("", response_model=FarmRead, status_code=status.HTTP_201_CREATED)
async def create_farm(
	payload: FarmCreate,
	db: AsyncSession = Depends(get_db),
) -> FarmRead:
	service = FarmService(db)
	try:
		farm = await service.create_farm(payload)
	except Exception as exc:
		raise _map_error(exc) from exc
	# A new farm has no harvest history yet.
	return _to_farm_read(farm, with_harvests=False)


@router.get("", response_model=FarmListRead)
async def list_farms(
	state: BrazilianState | None = None,
	producer_id: uuid.UUID | None = None,
	limit: int = Query(default=50, ge=1, le=500),
	offset: int = Query(default=0, ge=0),
	db: AsyncSession = Depends(get_db),
) -> FarmListRead:
	service = FarmService(db)
	try:
		farms = await service.list_farms(state=state, producer_id=producer_id, limit=limit, offset=offset)
		total = await service.count_farms(state=state, producer_id=producer_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return FarmListRead(items=[_to_farm_read(farm) for farm in farms], total=total)


@router.get("/{farm_id}", response_model=FarmRead)
async def get_farm(
	farm_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> FarmRead:
	service = FarmService(db)
	try:
		farm = await service.get_farm(farm_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return _to_farm_read(farm)
