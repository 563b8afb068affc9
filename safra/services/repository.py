"""Generic async repository over one ORM model.

Wraps the handful of session calls the services need (unique lookup, list,
create, update, delete). Integrity failures surface as the signals below;
services never see driver error codes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from safra.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)

_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


class PersistenceSignal(Exception):
	"""Base class for repository failure signals."""


class RecordNotFound(PersistenceSignal, LookupError):
	"""No row matches the given unique key."""


class UniqueViolation(PersistenceSignal):
	"""The write would break a uniqueness constraint."""

	def __init__(self, message: str, constraint: str | None = None) -> None:
		super().__init__(message)
		self.constraint = constraint


class ReferenceViolation(PersistenceSignal):
	"""The write or delete would break a foreign-key constraint."""


def _sqlstate(exc: IntegrityError) -> str | None:
	orig = exc.orig
	return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name(exc: IntegrityError) -> str | None:
	orig = exc.orig
	name = getattr(orig, "constraint_name", None)
	if name is None:
		name = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
	return name


def classify_integrity_error(exc: IntegrityError) -> PersistenceSignal:
	"""Map an IntegrityError onto the repository signal it represents."""
	code = _sqlstate(exc)
	if code == _UNIQUE_VIOLATION:
		return UniqueViolation("unique constraint violated", _constraint_name(exc))
	if code == _FOREIGN_KEY_VIOLATION:
		return ReferenceViolation("foreign key constraint violated")
	message = str(exc.orig).lower()
	if "unique" in message or "duplicate" in message:
		return UniqueViolation("unique constraint violated", _constraint_name(exc))
	return ReferenceViolation("integrity constraint violated")


class Repository(Generic[ModelT]):
	"""Find/create/update/delete for ``model`` keyed by unique columns."""

	def __init__(
		self,
		db: AsyncSession,
		model: type[ModelT],
		order_by: Sequence[Any] = (),
	):
		self.db = db
		self.model = model
		self.order_by = tuple(order_by)

	async def find_unique(self, **key: Any) -> ModelT | None:
		stmt = select(self.model).filter_by(**key)
		row = await self.db.execute(stmt)
		return row.scalar_one_or_none()

	async def find_many(self) -> list[ModelT]:
		stmt = select(self.model).order_by(*self.order_by)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def require(self, **key: Any) -> ModelT:
		instance = await self.find_unique(**key)
		if instance is None:
			raise RecordNotFound(f"{self.model.__name__} {key} not found")
		return instance

	async def create(self, **data: Any) -> ModelT:
		instance = self.model(**data)
		self.db.add(instance)
		await self._flush()
		await self.db.refresh(instance)
		return instance

	async def update(self, data: dict[str, Any], **key: Any) -> ModelT:
		instance = await self.require(**key)
		for field, value in data.items():
			setattr(instance, field, value)
		await self._flush()
		await self.db.refresh(instance)
		return instance

	async def delete(self, **key: Any) -> None:
		instance = await self.require(**key)
		await self.db.delete(instance)
		await self._flush()

	async def _flush(self) -> None:
		try:
			await self.db.flush()
		except IntegrityError as exc:
			await self.db.rollback()
			raise classify_integrity_error(exc) from exc
