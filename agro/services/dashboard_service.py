"""Aggregate figures over producers, farms and plantings."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agro.models import Farm, FarmHarvestCrop, Producer
from agro.schemas.dashboard import CropBreakdown, DashboardRead, LandUse, StateBreakdown


class DashboardService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def summary(self) -> DashboardRead:
		total_producers = await self.db.scalar(select(func.count(Producer.id)))

		totals = (
			await self.db.execute(
				select(
					func.count(Farm.id),
					func.coalesce(func.sum(Farm.total_area), 0),
					func.coalesce(func.sum(Farm.arable_area), 0),
					func.coalesce(func.sum(Farm.vegetation_area), 0),
				)
			)
		).one()
		total_farms, total_area, arable_area, vegetation_area = totals

		by_state = await self.db.execute(
			select(Farm.state, func.count(Farm.id))
			.group_by(Farm.state)
			.order_by(func.count(Farm.id).desc(), Farm.state)
		)
		by_crop = await self.db.execute(
			select(FarmHarvestCrop.crop_type, func.count(FarmHarvestCrop.id))
			.group_by(FarmHarvestCrop.crop_type)
			.order_by(func.count(FarmHarvestCrop.id).desc(), FarmHarvestCrop.crop_type)
		)

		total_area = Decimal(total_area)
		arable_area = Decimal(arable_area)
		vegetation_area = Decimal(vegetation_area)
		return DashboardRead(
			total_producers=int(total_producers or 0),
			total_farms=int(total_farms),
			total_hectares=total_area,
			by_state=[StateBreakdown(state=state, farm_count=count) for state, count in by_state.all()],
			by_crop=[CropBreakdown(crop_type=crop, planting_count=count) for crop, count in by_crop.all()],
			land_use=LandUse(
				arable_area=arable_area,
				vegetation_area=vegetation_area,
				unused_area=total_area - arable_area - vegetation_area,
			),
		)
