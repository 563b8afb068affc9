"""Production record CRUD routes."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from safra.database import get_db
from safra.errors import InternalError, ServiceError
from safra.schemas.production import (
	ProductionCreate,
	ProductionMessage,
	ProductionRead,
	ProductionUpdate,
	PropertyRead,
)
from safra.services.production_service import ProductionService

router = APIRouter(prefix="/productions", tags=["productions"])
logger = structlog.get_logger("safra.productions")


def _map_error(exc: Exception, fallback: str) -> HTTPException:
	if not isinstance(exc, ServiceError):
		logger.exception("production_failure", error=str(exc))
		exc = InternalError(fallback)
	return HTTPException(status_code=exc.status_code, detail=exc.message)


def _to_production_read(production: Any) -> ProductionRead:
	return ProductionRead(
		id=production.id,
		harvest_season=production.harvest_season,
		production_area=production.production_area,
		cultivated_area=production.cultivated_area,
		date=production.date,
		crop=production.crop,
		property_id=production.property_id,
		property=PropertyRead(id=production.property.id, name=production.property.name),
		created_at=production.created_at,
		updated_at=production.updated_at,
	)


@router.get("", response_model=list[ProductionRead])
async def list_productions(db: AsyncSession = Depends(get_db)) -> list[ProductionRead]:
	service = ProductionService(db)
	try:
		productions = await service.list_productions()
	except Exception as exc:
		raise _map_error(exc, "An error occurred while fetching productions.") from exc
	return [_to_production_read(production) for production in productions]


@router.get("/{production_id}", response_model=ProductionRead)
async def get_production(
	production_id: int,
	db: AsyncSession = Depends(get_db),
) -> ProductionRead:
	service = ProductionService(db)
	try:
		production = await service.get_production(production_id)
	except Exception as exc:
		raise _map_error(exc, "An error occurred while fetching this production.") from exc
	return _to_production_read(production)


@router.post("", response_model=ProductionMessage, status_code=status.HTTP_201_CREATED)
async def create_production(
	payload: ProductionCreate,
	db: AsyncSession = Depends(get_db),
) -> ProductionMessage:
	service = ProductionService(db)
	try:
		production = await service.create_production(payload)
		await db.commit()
	except Exception as exc:
		raise _map_error(exc, "Could not register the production. Try again later.") from exc
	return ProductionMessage(
		message="Production registered successfully!",
		production=_to_production_read(production),
	)


@router.put("/{production_id}", response_model=ProductionMessage)
async def update_production(
	production_id: int,
	payload: ProductionUpdate,
	db: AsyncSession = Depends(get_db),
) -> ProductionMessage:
	service = ProductionService(db)
	try:
		production = await service.update_production(production_id, payload)
		await db.commit()
	except Exception as exc:
		raise _map_error(exc, "An error occurred while updating the production. Try again.") from exc
	return ProductionMessage(
		message="Production updated successfully!",
		production=_to_production_read(production),
	)


@router.delete("/{production_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_production(
	production_id: int,
	db: AsyncSession = Depends(get_db),
) -> Response:
	service = ProductionService(db)
	try:
		await service.delete_production(production_id)
		await db.commit()
	except Exception as exc:
		raise _map_error(
			exc, "An error occurred while deleting the production. Check for associated records."
		) from exc
	return Response(status_code=status.HTTP_204_NO_CONTENT)
