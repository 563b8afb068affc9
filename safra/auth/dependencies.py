"""Authentication dependencies — bearer token → authenticated user id."""

from __future__ import annotations

import uuid

from fastapi import HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from safra.auth.jwt import TokenError, TokenSigner
from safra.auth.passwords import PasswordHasher
from safra.config import get_settings

bearer_scheme = HTTPBearer(auto_error=False)


def _raise_auth(exc: TokenError) -> HTTPException:
	return HTTPException(status_code=exc.status_code, detail=exc.detail)


def get_token_signer() -> TokenSigner:
	return TokenSigner.from_settings(get_settings())


def get_password_hasher() -> PasswordHasher:
	return PasswordHasher.from_settings(get_settings())


def resolve_user_id(
	signer: TokenSigner,
	credentials: HTTPAuthorizationCredentials | None,
) -> uuid.UUID:
	if credentials is None or credentials.scheme.lower() != "bearer":
		raise _raise_auth(TokenError(code="auth_required", detail="Bearer token is required"))

	try:
		payload = signer.decode(credentials.credentials)
	except TokenError as exc:
		raise _raise_auth(exc) from exc

	try:
		return uuid.UUID(str(payload["id"]))
	except (ValueError, KeyError) as exc:
		raise _raise_auth(TokenError(code="token_invalid", detail="Token subject is invalid")) from exc


async def get_current_user_id(request: Request) -> uuid.UUID:
	"""Identity of the caller, taken only from a verified bearer token.

	The user row is not loaded here: handlers report a deleted account as
	not found rather than as an authentication failure.
	"""
	credentials = await bearer_scheme(request)
	return resolve_user_id(get_token_signer(), credentials)
