"""Response schemas for the aggregate dashboard."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from agro.models.enums import BrazilianState, CropType


class StateBreakdown(BaseModel):
	state: BrazilianState
	farm_count: int


class CropBreakdown(BaseModel):
	crop_type: CropType
	planting_count: int


class LandUse(BaseModel):
	arable_area: Decimal = Decimal("0")
	vegetation_area: Decimal = Decimal("0")
	unused_area: Decimal = Decimal("0")


class DashboardRead(BaseModel):
	total_producers: int
	total_farms: int
	total_hectares: Decimal
	by_state: list[StateBreakdown] = Field(default_factory=list)
	by_crop: list[CropBreakdown] = Field(default_factory=list)
	land_use: LandUse = Field(default_factory=LandUse)
