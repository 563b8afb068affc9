"""Production record CRUD with property-by-name association."""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from safra.errors import AssociationError, ConflictError, NotFoundError
from safra.models.production import Production, Property
from safra.schemas.production import ProductionCreate, ProductionUpdate
from safra.services.repository import RecordNotFound, ReferenceViolation, Repository

logger = structlog.get_logger("safra.productions")

# productions.id is a 32-bit serial column.
_MAX_PRODUCTION_ID = 2_147_483_647


class ProductionService:
	"""Service for production CRUD; every write resolves its property first."""

	def __init__(self, db: AsyncSession):
		self.db = db
		self.productions: Repository[Production] = Repository(
			db, Production, order_by=(Production.id.asc(),)
		)
		self.properties: Repository[Property] = Repository(db, Property)

	async def list_productions(self) -> list[Production]:
		productions = await self.productions.find_many()
		logger.info("productions_listed", count=len(productions))
		return productions

	async def get_production(self, production_id: int) -> Production:
		production = None
		if _storable_id(production_id):
			production = await self.productions.find_unique(id=production_id)
		if production is None:
			logger.warning("production_missing", production_id=production_id)
			raise NotFoundError(f'Production with ID "{production_id}" not found.')
		return production

	async def create_production(self, payload: ProductionCreate) -> Production:
		prop = await self._resolve_property(payload.property_name)
		production = await self.productions.create(
			harvest_season=payload.harvest_season,
			production_area=payload.production_area,
			cultivated_area=payload.cultivated_area,
			date=payload.date,
			crop=payload.crop,
			property=prop,
		)
		logger.info(
			"production_created",
			production_id=production.id,
			safra=production.harvest_season,
			property=prop.name,
		)
		return production

	async def update_production(self, production_id: int, payload: ProductionUpdate) -> Production:
		changes: dict[str, Any] = payload.model_dump(
			exclude_unset=True,
			exclude_none=True,
			exclude={"property_name"},
		)
		if payload.property_name:
			changes["property"] = await self._resolve_property(payload.property_name)

		try:
			if not _storable_id(production_id):
				raise RecordNotFound(f"Production {production_id} out of range")
			production = await self.productions.update(changes, id=production_id)
		except RecordNotFound as exc:
			logger.warning("production_missing", production_id=production_id)
			raise NotFoundError(
				f'Could not find production with ID "{production_id}" to update.'
			) from exc

		logger.info("production_updated", production_id=production.id, fields=sorted(changes))
		return production

	async def delete_production(self, production_id: int) -> None:
		try:
			if not _storable_id(production_id):
				raise RecordNotFound(f"Production {production_id} out of range")
			await self.productions.delete(id=production_id)
		except RecordNotFound as exc:
			logger.warning("production_missing", production_id=production_id)
			raise NotFoundError(
				f'Could not find production with ID "{production_id}" to delete.'
			) from exc
		except ReferenceViolation as exc:
			logger.warning("production_delete_blocked", production_id=production_id)
			raise ConflictError(
				"Production could not be deleted because other records reference it.",
				status_code=409,
			) from exc
		logger.info("production_deleted", production_id=production_id)

	async def _resolve_property(self, name: str) -> Property:
		prop = await self.properties.find_unique(name=name)
		if prop is None:
			logger.warning("property_missing", property=name)
			raise AssociationError(f'Property "{name}" does not exist. Check the property name.')
		return prop


def _storable_id(production_id: int) -> bool:
	"""Ids the column cannot hold can never match a row."""
	return 1 <= production_id <= _MAX_PRODUCTION_ID
