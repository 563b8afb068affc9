from __future__ import annotations

from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from safra.models.user import User
from safra.services.repository import (
	RecordNotFound,
	ReferenceViolation,
	Repository,
	UniqueViolation,
	classify_integrity_error,
)


class _DriverError(Exception):
	def __init__(self, message: str, sqlstate: str | None = None) -> None:
		super().__init__(message)
		self.sqlstate = sqlstate


def _integrity_error(message: str, sqlstate: str | None = None) -> IntegrityError:
	return IntegrityError("INSERT INTO users ...", {}, _DriverError(message, sqlstate))


def _result(value: object) -> SimpleNamespace:
	return SimpleNamespace(scalar_one_or_none=lambda: value)


def test_classify_by_sqlstate() -> None:
	assert isinstance(classify_integrity_error(_integrity_error("x", "23505")), UniqueViolation)
	assert isinstance(classify_integrity_error(_integrity_error("x", "23503")), ReferenceViolation)


def test_classify_falls_back_to_message() -> None:
	signal = classify_integrity_error(_integrity_error("UNIQUE constraint failed: users.email"))
	assert isinstance(signal, UniqueViolation)


@pytest.mark.asyncio
async def test_create_translates_unique_violation(fake_db_session) -> None:
	fake_db_session.flush.side_effect = _integrity_error("duplicate key", "23505")
	repo = Repository(fake_db_session, User)

	with pytest.raises(UniqueViolation):
		await repo.create(name="Ana", email="ana@example.com", phone="1", hashed_password="h")

	fake_db_session.rollback.assert_awaited_once()
	fake_db_session.refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_adds_flushes_and_refreshes(fake_db_session) -> None:
	repo = Repository(fake_db_session, User)

	user = await repo.create(name="Ana", email="ana@example.com", phone="1", hashed_password="h")

	assert isinstance(user, User)
	fake_db_session.add.assert_called_once_with(user)
	fake_db_session.flush.assert_awaited_once()
	fake_db_session.refresh.assert_awaited_once_with(user)


@pytest.mark.asyncio
async def test_update_and_delete_missing_row_signal_not_found(fake_db_session) -> None:
	fake_db_session.execute.return_value = _result(None)
	repo = Repository(fake_db_session, User)

	with pytest.raises(RecordNotFound):
		await repo.update({"name": "x"}, email="ghost@example.com")
	with pytest.raises(RecordNotFound):
		await repo.delete(email="ghost@example.com")
	fake_db_session.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_blocked_by_foreign_key(fake_db_session) -> None:
	user = User(name="Ana", email="ana@example.com", phone="1", hashed_password="h")
	fake_db_session.execute.return_value = _result(user)
	fake_db_session.flush.side_effect = _integrity_error("violates foreign key", "23503")
	repo = Repository(fake_db_session, User)

	with pytest.raises(ReferenceViolation):
		await repo.delete(email="ana@example.com")
	fake_db_session.delete.assert_awaited_once_with(user)


@pytest.mark.asyncio
async def test_update_sets_fields_on_found_row(fake_db_session) -> None:
	user = User(name="Ana", email="ana@example.com", phone="1", hashed_password="h")
	fake_db_session.execute.return_value = _result(user)
	repo = Repository(fake_db_session, User)

	updated = await repo.update({"phone": "2"}, email="ana@example.com")

	assert updated is user
	assert user.phone == "2"
	fake_db_session.refresh.assert_awaited_once_with(user)
