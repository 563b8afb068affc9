"""Shared pytest fixtures — async test client, fake DB session, in-memory repositories."""

from __future__ import annotations

import itertools
import uuid
from collections.abc import AsyncGenerator, Callable, Iterable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from safra.auth.dependencies import get_current_user_id, get_token_signer
from safra.auth.jwt import TokenSigner
from safra.auth.passwords import PasswordHasher
from safra.database import get_db
from safra.main import app
from safra.services.auth_service import AuthService
from safra.services.production_service import ProductionService
from safra.services.repository import RecordNotFound, ReferenceViolation, UniqueViolation


class FakeAsyncSession:
	def __init__(self) -> None:
		self.add = MagicMock()
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock()
		self.flush = AsyncMock()
		self.refresh = AsyncMock()
		self.delete = AsyncMock()


class InMemoryRepository:
	"""Dict-backed stand-in for ``Repository`` that raises the same signals."""

	def __init__(
		self,
		unique: Iterable[str] = (),
		id_factory: Callable[[], Any] | None = None,
	) -> None:
		counter = itertools.count(1)
		self.unique = tuple(unique)
		self.id_factory = id_factory or (lambda: next(counter))
		self.rows: list[SimpleNamespace] = []
		self.blocked_ids: set[Any] = set()
		self.calls = 0

	def seed(self, **data: Any) -> SimpleNamespace:
		now = datetime.now(UTC)
		row = SimpleNamespace(id=self.id_factory(), created_at=now, updated_at=now, **data)
		self._link(row)
		self.rows.append(row)
		return row

	async def find_unique(self, **key: Any) -> SimpleNamespace | None:
		self.calls += 1
		for row in self.rows:
			if all(getattr(row, field, None) == value for field, value in key.items()):
				return row
		return None

	async def find_many(self) -> list[SimpleNamespace]:
		self.calls += 1
		return list(self.rows)

	async def require(self, **key: Any) -> SimpleNamespace:
		row = await self.find_unique(**key)
		if row is None:
			raise RecordNotFound(f"{key} not found")
		return row

	async def create(self, **data: Any) -> SimpleNamespace:
		self.calls += 1
		self._check_unique(data, exclude=None)
		return self.seed(**data)

	async def update(self, data: dict[str, Any], **key: Any) -> SimpleNamespace:
		row = await self.require(**key)
		self._check_unique(data, exclude=row)
		for field, value in data.items():
			setattr(row, field, value)
		self._link(row)
		row.updated_at = datetime.now(UTC)
		return row

	async def delete(self, **key: Any) -> None:
		row = await self.require(**key)
		if row.id in self.blocked_ids:
			raise ReferenceViolation("foreign key constraint violated")
		self.rows.remove(row)

	def _check_unique(self, data: dict[str, Any], exclude: SimpleNamespace | None) -> None:
		for field in self.unique:
			if field not in data:
				continue
			for row in self.rows:
				if row is not exclude and getattr(row, field, None) == data[field]:
					raise UniqueViolation("unique constraint violated", f"{field}_key")

	@staticmethod
	def _link(row: SimpleNamespace) -> None:
		prop = getattr(row, "property", None)
		if prop is not None:
			row.property_id = prop.id


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides in API tests."""
	return FakeAsyncSession()


@pytest.fixture
def auth_user_id() -> uuid.UUID:
	return uuid.UUID("11111111-1111-1111-1111-111111111111")


@pytest.fixture
def signer() -> TokenSigner:
	return get_token_signer()


@pytest.fixture
def hasher() -> PasswordHasher:
	# Minimum bcrypt cost keeps the suite fast.
	return PasswordHasher(rounds=4)


@pytest.fixture
def access_token(signer: TokenSigner, auth_user_id: uuid.UUID) -> str:
	return signer.issue(auth_user_id)


@pytest.fixture
def user_repo() -> InMemoryRepository:
	return InMemoryRepository(unique=("email",), id_factory=uuid.uuid4)


@pytest.fixture
def auth_service(
	signer: TokenSigner,
	hasher: PasswordHasher,
	user_repo: InMemoryRepository,
) -> AuthService:
	service = AuthService(SimpleNamespace(), signer=signer, hasher=hasher)  # type: ignore[arg-type]
	service.users = user_repo  # type: ignore[assignment]
	return service


@pytest.fixture
def property_repo() -> InMemoryRepository:
	repo = InMemoryRepository(unique=("name",))
	repo.seed(name="Fazenda X")
	return repo


@pytest.fixture
def production_repo() -> InMemoryRepository:
	return InMemoryRepository()


@pytest.fixture
def production_service(
	property_repo: InMemoryRepository,
	production_repo: InMemoryRepository,
) -> ProductionService:
	service = ProductionService(SimpleNamespace())  # type: ignore[arg-type]
	service.properties = property_repo  # type: ignore[assignment]
	service.productions = production_repo  # type: ignore[assignment]
	return service


@asynccontextmanager
async def _test_client(overrides: dict[Any, Any]) -> AsyncGenerator[AsyncClient, None]:
	app.dependency_overrides.update(overrides)
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	try:
		async with AsyncClient(transport=transport, base_url="http://test") as test_client:
			yield test_client
	finally:
		app.router.lifespan_context = original_lifespan
		app.dependency_overrides.clear()


@pytest.fixture
async def client(
	fake_db_session: FakeAsyncSession,
	auth_user_id: uuid.UUID,
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled, DB and caller identity mocked."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	async def override_current_user_id() -> uuid.UUID:
		return auth_user_id

	async with _test_client(
		{get_db: override_get_db, get_current_user_id: override_current_user_id}
	) as test_client:
		yield test_client


@pytest.fixture
async def auth_client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with DB override only (real bearer-token dependency active)."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	async with _test_client({get_db: override_get_db}) as test_client:
		yield test_client
