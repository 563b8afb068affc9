"""Account registration, login, profile update and deletion."""

from __future__ import annotations

import uuid
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from safra.auth.jwt import TokenSigner
from safra.auth.passwords import PasswordHasher
from safra.errors import AuthError, ConflictError, NotFoundError, ValidationError
from safra.models.user import User
from safra.schemas.auth import LoginRequest, RegisterRequest, UserUpdateRequest
from safra.services.repository import RecordNotFound, Repository, UniqueViolation

logger = structlog.get_logger("safra.auth")


class AuthService:
	"""Stateless account operations; each call returns ``(user, token)``.

	The signer and hasher are injected so the signing secret and hash cost
	come from whoever builds the service.
	"""

	def __init__(
		self,
		db: AsyncSession,
		signer: TokenSigner,
		hasher: PasswordHasher,
		login_not_found_status: int = 400,
	):
		self.db = db
		self.signer = signer
		self.hasher = hasher
		self.login_not_found_status = login_not_found_status
		self.users: Repository[User] = Repository(db, User)

	async def register(self, payload: RegisterRequest) -> tuple[User, str]:
		logger.info("register_received", email=payload.email)
		if payload.password != payload.password_confirmation:
			logger.warning("register_rejected", reason="password_mismatch")
			raise ValidationError("Passwords do not match.")

		if await self.users.find_unique(email=payload.email) is not None:
			logger.warning("register_rejected", reason="email_taken", email=payload.email)
			raise ConflictError("A user with this email already exists.")

		try:
			user = await self.users.create(
				name=payload.name,
				email=payload.email,
				phone=payload.phone,
				hashed_password=self.hasher.hash(payload.password),
			)
		except UniqueViolation as exc:
			logger.warning("register_rejected", reason="email_taken", email=payload.email)
			raise ConflictError("A user with this email already exists.") from exc

		logger.info("register_succeeded", user_id=str(user.id))
		return user, self.signer.issue(user.id)

	async def login(self, payload: LoginRequest) -> tuple[User, str]:
		logger.info("login_received", email=payload.email)
		user = await self.users.find_unique(email=payload.email)
		if user is None:
			logger.warning("login_rejected", reason="unknown_email", email=payload.email)
			raise NotFoundError("User not found.", status_code=self.login_not_found_status)

		if not self.hasher.verify(payload.password, user.hashed_password):
			logger.warning("login_rejected", reason="bad_password", user_id=str(user.id))
			raise AuthError("Invalid password.")

		logger.info("login_succeeded", user_id=str(user.id))
		return user, self.signer.issue(user.id)

	async def update(self, user_id: uuid.UUID, payload: UserUpdateRequest) -> tuple[User, str]:
		logger.info("update_received", user_id=str(user_id))
		changes: dict[str, Any] = {}
		if payload.name:
			changes["name"] = payload.name
		if payload.email:
			changes["email"] = payload.email
		if payload.phone:
			changes["phone"] = payload.phone

		if payload.password or payload.password_confirmation:
			if not payload.password or not payload.password_confirmation:
				logger.warning("update_rejected", reason="password_incomplete", user_id=str(user_id))
				raise ValidationError("To change the password, send password and passwordConfirmation.")
			if payload.password != payload.password_confirmation:
				logger.warning("update_rejected", reason="password_mismatch", user_id=str(user_id))
				raise ValidationError("Passwords do not match.")
			changes["hashed_password"] = self.hasher.hash(payload.password)
			logger.info("password_change_requested", user_id=str(user_id))

		try:
			user = await self.users.update(changes, id=user_id)
		except RecordNotFound as exc:
			logger.warning("update_rejected", reason="user_missing", user_id=str(user_id))
			raise NotFoundError("User not found for update.") from exc
		except UniqueViolation as exc:
			logger.warning("update_rejected", reason="email_taken", user_id=str(user_id))
			raise ConflictError("This email is already in use.") from exc

		logger.info("update_succeeded", user_id=str(user.id), fields=sorted(changes))
		return user, self.signer.issue(user.id)

	async def delete(self, user_id: uuid.UUID) -> None:
		logger.info("delete_received", user_id=str(user_id))
		try:
			await self.users.delete(id=user_id)
		except RecordNotFound as exc:
			logger.warning("delete_rejected", reason="user_missing", user_id=str(user_id))
			raise NotFoundError("User not found for deletion.") from exc
		logger.info("delete_succeeded", user_id=str(user_id))
