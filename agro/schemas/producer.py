"""Pydantic request/response schemas for producers."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agro.models.enums import ProducerKind
from agro.validators import normalize_document


class ProducerCreate(BaseModel):
	document: str = Field(min_length=11, max_length=18)
	name: str = Field(min_length=1, max_length=255)

	@field_validator("document")
	@classmethod
	def _normalize_document(cls, value: str) -> str:
		return normalize_document(value)


class ProducerRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	document: str
	name: str
	kind: ProducerKind
	farm_count: int = 0
	created_at: datetime
	updated_at: datetime


class ProducerListRead(BaseModel):
	items: list[ProducerRead]
	total: int
