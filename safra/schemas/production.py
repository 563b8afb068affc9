"""Pydantic request/response schemas for production records."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_REQUEST_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_RESPONSE_CONFIG = ConfigDict(
	from_attributes=True,
	alias_generator=AliasGenerator(serialization_alias=to_camel),
)


def _as_aware(value: datetime | None) -> datetime | None:
	if value is not None and value.tzinfo is None:
		return value.replace(tzinfo=UTC)
	return value


class ProductionCreate(BaseModel):
	model_config = _REQUEST_CONFIG

	harvest_season: str = Field(alias="safra", min_length=1, max_length=64)
	production_area: float = Field(gt=0)
	cultivated_area: float | None = Field(default=None, gt=0)
	date: datetime
	property_name: str = Field(min_length=1, max_length=255)
	crop: str = Field(min_length=1, max_length=100)

	@field_validator("date")
	@classmethod
	def normalize_date(cls, value: datetime | None) -> datetime | None:
		return _as_aware(value)


class ProductionUpdate(BaseModel):
	model_config = _REQUEST_CONFIG

	harvest_season: str | None = Field(default=None, alias="safra", min_length=1, max_length=64)
	production_area: float | None = Field(default=None, gt=0)
	cultivated_area: float | None = Field(default=None, gt=0)
	date: datetime | None = None
	property_name: str | None = Field(default=None, max_length=255)
	crop: str | None = Field(default=None, min_length=1, max_length=100)

	@field_validator("date")
	@classmethod
	def normalize_date(cls, value: datetime | None) -> datetime | None:
		return _as_aware(value)


class PropertyRead(BaseModel):
	model_config = _RESPONSE_CONFIG

	id: int
	name: str


class ProductionRead(BaseModel):
	model_config = _RESPONSE_CONFIG

	id: int
	harvest_season: str = Field(serialization_alias="safra")
	production_area: float
	cultivated_area: float | None = None
	date: datetime
	crop: str
	property_id: int
	property: PropertyRead
	created_at: datetime
	updated_at: datetime


class ProductionMessage(BaseModel):
	message: str
	production: ProductionRead
