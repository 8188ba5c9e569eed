"""Producer CRUD routes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agro.database import get_db
from agro.models import Producer
from agro.schemas.producer import ProducerCreate, ProducerListRead, ProducerRead
from agro.services.producer_service import ProducerService

router = APIRouter(prefix="/producers", tags=["producers"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, IntegrityError):
		return HTTPException(
			status_code=status.HTTP_409_CONFLICT,
			detail="A producer with this document already exists",
		)
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected producer service failure",
	)


def _to_producer_read(producer: Producer, farm_count: int) -> ProducerRead:
	return ProducerRead(
		id=producer.id,
		document=producer.document,
		name=producer.name,
		kind=producer.kind,
		farm_count=farm_count,
		created_at=producer.created_at,
		updated_at=producer.updated_at,
	)


@router.post("", response_model=ProducerRead, status_code=status.HTTP_201_CREATED)
async def create_producer(
	payload: ProducerCreate,
	db: AsyncSession = Depends(get_db),
) -> ProducerRead:
	service = ProducerService(db)
	try:
		producer = await service.create_producer(payload)
	except Exception as exc:
		raise _map_error(exc) from exc
	return _to_producer_read(producer, farm_count=0)


@router.get("", response_model=ProducerListRead)
async def list_producers(
	limit: int = Query(default=50, ge=1, le=500),
	offset: int = Query(default=0, ge=0),
	db: AsyncSession = Depends(get_db),
) -> ProducerListRead:
	service = ProducerService(db)
	try:
		rows = await service.list_producers(limit=limit, offset=offset)
		total = await service.count_producers()
	except Exception as exc:
		raise _map_error(exc) from exc
	return ProducerListRead(
		items=[_to_producer_read(producer, farm_count) for producer, farm_count in rows],
		total=total,
	)


@router.get("/{producer_id}", response_model=ProducerRead)
async def get_producer(
	producer_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> ProducerRead:
	service = ProducerService(db)
	try:
		producer, farm_count = await service.get_producer(producer_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return _to_producer_read(producer, farm_count)


@router.delete("/{producer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_producer(
	producer_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> Response:
	service = ProducerService(db)
	try:
		await service.delete_producer(producer_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return Response(status_code=status.HTTP_204_NO_CONTENT)
