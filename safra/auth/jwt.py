"""JWT token issuance and validation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from safra.config import Settings


@dataclass(slots=True)
class TokenError(Exception):
	"""Structured token error for consistent mapping at the edge."""

	code: str
	detail: str
	status_code: int = 401


class TokenSigner:
	"""Signs and verifies access tokens carrying ``{"id": <user id>}``.

	The secret, algorithm and lifetime are passed in at construction; nothing
	here reads global configuration.
	"""

	token_type = "access"

	def __init__(self, secret: str, algorithm: str = "HS256", ttl_minutes: int = 1440):
		self.secret = secret
		self.algorithm = algorithm
		self.ttl = timedelta(minutes=ttl_minutes)

	@classmethod
	def from_settings(cls, settings: Settings) -> TokenSigner:
		return cls(
			secret=settings.jwt_secret,
			algorithm=settings.jwt_algorithm,
			ttl_minutes=settings.jwt_access_token_expire_minutes,
		)

	def issue(self, user_id: uuid.UUID | str) -> str:
		now = datetime.now(UTC)
		subject = str(user_id)
		claims: dict[str, Any] = {
			"id": subject,
			"sub": subject,
			"typ": self.token_type,
			"iat": int(now.timestamp()),
			"exp": int((now + self.ttl).timestamp()),
		}
		return jwt.encode(claims, self.secret, algorithm=self.algorithm)

	def decode(self, token: str) -> dict[str, Any]:
		try:
			payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
		except ExpiredSignatureError as exc:
			raise TokenError(code="token_expired", detail="Authentication token has expired") from exc
		except JWTError as exc:
			raise TokenError(code="token_invalid", detail="Invalid authentication token") from exc

		subject = payload.get("id")
		if not isinstance(subject, str) or not subject:
			raise TokenError(code="token_invalid", detail="Token subject is missing")

		if payload.get("typ") != self.token_type:
			raise TokenError(code="token_type_invalid", detail=f"Expected {self.token_type} token")

		exp_raw = payload.get("exp")
		if not isinstance(exp_raw, int):
			raise TokenError(code="token_invalid", detail="Token expiration is missing")

		return payload
