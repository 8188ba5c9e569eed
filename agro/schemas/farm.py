"""Pydantic request/response schemas for farm objects."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from agro.models.enums import BrazilianState, CropType
from agro.validators import validate_farm_areas

_AREA = {"max_digits": 10, "decimal_places": 2}


class FarmCreate(BaseModel):
	name: str = Field(min_length=1, max_length=255)
	city: str = Field(min_length=1, max_length=255)
	state: BrazilianState
	total_area: Decimal = Field(gt=0, **_AREA)
	arable_area: Decimal = Field(ge=0, **_AREA)
	vegetation_area: Decimal = Field(ge=0, **_AREA)
	producer_id: uuid.UUID

	@model_validator(mode="after")
	def _check_areas(self) -> FarmCreate:
		validate_farm_areas(self.total_area, self.arable_area, self.vegetation_area)
		return self


class HarvestRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	year: str
	description: str | None = None


class FarmHarvestRead(BaseModel):
	harvest: HarvestRead
	crops: list[CropType] = Field(default_factory=list)


class FarmRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	city: str
	state: BrazilianState
	total_area: Decimal
	arable_area: Decimal
	vegetation_area: Decimal
	producer_id: uuid.UUID
	created_at: datetime
	updated_at: datetime
	harvests: list[FarmHarvestRead] = Field(default_factory=list)


class FarmListRead(BaseModel):
	items: list[FarmRead]
	total: int
