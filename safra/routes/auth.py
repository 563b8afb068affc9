"""Account routes — register, login, update, delete."""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from safra.auth.dependencies import get_current_user_id, get_password_hasher, get_token_signer
from safra.config import get_settings
from safra.database import get_db
from safra.errors import InternalError, ServiceError
from safra.models.user import User
from safra.schemas.auth import (
	AuthResponse,
	LoginRequest,
	RegisterRequest,
	UserRead,
	UserUpdateRequest,
)
from safra.services.auth_service import AuthService

router = APIRouter(tags=["auth"])
logger = structlog.get_logger("safra.auth")


def _map_error(exc: Exception, fallback: str) -> HTTPException:
	if not isinstance(exc, ServiceError):
		logger.exception("auth_failure", error=str(exc))
		exc = InternalError(fallback)
	return HTTPException(status_code=exc.status_code, detail=exc.message)


def _service(db: AsyncSession) -> AuthService:
	return AuthService(
		db,
		signer=get_token_signer(),
		hasher=get_password_hasher(),
		login_not_found_status=get_settings().login_not_found_status_code,
	)


def _to_auth_response(user: User, token: str) -> AuthResponse:
	return AuthResponse(
		user=UserRead(
			id=user.id,
			name=user.name,
			email=user.email,
			phone=user.phone,
			created_at=user.created_at,
			updated_at=user.updated_at,
		),
		token=token,
	)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
	payload: RegisterRequest,
	db: AsyncSession = Depends(get_db),
) -> AuthResponse:
	try:
		user, token = await _service(db).register(payload)
		await db.commit()
	except Exception as exc:
		raise _map_error(exc, "Failed to register user.") from exc
	return _to_auth_response(user, token)


@router.post("/login", response_model=AuthResponse)
async def login(
	payload: LoginRequest,
	db: AsyncSession = Depends(get_db),
) -> AuthResponse:
	try:
		user, token = await _service(db).login(payload)
	except Exception as exc:
		raise _map_error(exc, "Failed to log in.") from exc
	return _to_auth_response(user, token)


async def _update(
	payload: UserUpdateRequest,
	db: AsyncSession,
	user_id: uuid.UUID,
) -> AuthResponse:
	try:
		user, token = await _service(db).update(user_id, payload)
		await db.commit()
	except Exception as exc:
		raise _map_error(exc, "Failed to update user.") from exc
	return _to_auth_response(user, token)


@router.put("/update", response_model=AuthResponse)
async def update(
	payload: UserUpdateRequest,
	db: AsyncSession = Depends(get_db),
	user_id: uuid.UUID = Depends(get_current_user_id),
) -> AuthResponse:
	return await _update(payload, db, user_id)


@router.patch("/update", response_model=AuthResponse)
async def patch_update(
	payload: UserUpdateRequest,
	db: AsyncSession = Depends(get_db),
	user_id: uuid.UUID = Depends(get_current_user_id),
) -> AuthResponse:
	return await _update(payload, db, user_id)


@router.delete("/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
	db: AsyncSession = Depends(get_db),
	user_id: uuid.UUID = Depends(get_current_user_id),
) -> Response:
	try:
		await _service(db).delete(user_id)
		await db.commit()
	except Exception as exc:
		raise _map_error(exc, "Failed to delete user.") from exc
	return Response(status_code=status.HTTP_204_NO_CONTENT)
