"""Pydantic request/response schemas for account endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_REQUEST_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_RESPONSE_CONFIG = ConfigDict(
	from_attributes=True,
	alias_generator=AliasGenerator(serialization_alias=to_camel),
)


class RegisterRequest(BaseModel):
	model_config = _REQUEST_CONFIG

	name: str = Field(min_length=1, max_length=255)
	email: str = Field(min_length=1, max_length=320)
	phone: str = Field(min_length=1, max_length=32)
	password: str = Field(min_length=1)
	password_confirmation: str = Field(min_length=1)


class LoginRequest(BaseModel):
	model_config = _REQUEST_CONFIG

	email: str = Field(min_length=1, max_length=320)
	password: str = Field(min_length=1)


class UserUpdateRequest(BaseModel):
	"""Partial profile update; identity always comes from the bearer token."""

	model_config = _REQUEST_CONFIG

	name: str | None = Field(default=None, max_length=255)
	email: str | None = Field(default=None, max_length=320)
	phone: str | None = Field(default=None, max_length=32)
	password: str | None = None
	password_confirmation: str | None = None


class UserRead(BaseModel):
	model_config = _RESPONSE_CONFIG

	id: uuid.UUID
	name: str
	email: str
	phone: str
	created_at: datetime
	updated_at: datetime


class AuthResponse(BaseModel):
	user: UserRead
	token: str
