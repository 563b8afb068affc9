from __future__ import annotations

import pytest
from httpx import AsyncClient

from safra.config import Settings
from safra.middleware.errors import INVALID_ID_MESSAGE, describe_validation_errors


@pytest.mark.asyncio
async def test_health_check_echoes_request_id(client: AsyncClient) -> None:
	response = await client.get("/health", headers={"x-request-id": "req-42"})

	assert response.status_code == 200
	assert response.json()["status"] == "ok"
	assert response.headers["x-request-id"] == "req-42"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client: AsyncClient) -> None:
	response = await client.get("/nope")

	assert response.status_code == 404
	assert set(response.json()) == {"error"}


@pytest.mark.asyncio
async def test_openapi_lists_routes(client: AsyncClient) -> None:
	response = await client.get("/openapi.json")
	paths = response.json()["paths"]

	assert {"put", "patch"} <= set(paths["/update"])
	assert "delete" in paths["/delete"]
	assert {"get", "put", "delete"} <= set(paths["/productions/{production_id}"])

	operation_ids = [op["operationId"] for path in paths.values() for op in path.values()]
	assert len(operation_ids) == len(set(operation_ids))


def test_describe_validation_errors() -> None:
	message = describe_validation_errors(
		[
			{"loc": ("body", "email"), "type": "missing"},
			{"loc": ("body", "phone"), "type": "string_too_short"},
		]
	)
	assert message == "Missing required fields: email. Invalid or empty fields: phone."
	assert describe_validation_errors([{"loc": ("path", "production_id"), "type": "int_parsing"}]) == INVALID_ID_MESSAGE


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.setenv("JWT_SECRET", "from-env")
	settings = Settings(_env_file=None)

	assert settings.jwt_secret == "from-env"
	assert settings.jwt_access_token_expire_minutes == 24 * 60
	assert settings.password_hash_rounds == 10
	assert settings.login_not_found_status_code == 400
