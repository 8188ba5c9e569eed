"""Pydantic response schemas for catalog municipalities."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict

from agro.models.enums import BrazilianState


class CityRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	state: BrazilianState
	ibge_code: str


class CityListRead(BaseModel):
	items: list[CityRead]
