"""Exception handlers rendering every error as ``{"error": "<message>"}``."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

INVALID_ID_MESSAGE = "Invalid production ID. It must be a number."


def _error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
	return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _field_name(loc: tuple[Any, ...]) -> str:
	return ".".join(str(part) for part in loc[1:]) or str(loc[0])


def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
	"""Condense pydantic errors into one sentence naming the offending fields."""
	if any(error.get("loc", ("",))[0] == "path" for error in errors):
		return INVALID_ID_MESSAGE

	missing = [_field_name(tuple(e["loc"])) for e in errors if e.get("type") == "missing"]
	invalid = [_field_name(tuple(e["loc"])) for e in errors if e.get("type") != "missing"]
	parts: list[str] = []
	if missing:
		parts.append(f"Missing required fields: {', '.join(dict.fromkeys(missing))}.")
	if invalid:
		parts.append(f"Invalid or empty fields: {', '.join(dict.fromkeys(invalid))}.")
	return " ".join(parts) or "Invalid request."


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
	detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
	return _error_response(exc.status_code, detail, headers=getattr(exc, "headers", None))


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
	return _error_response(
		status.HTTP_400_BAD_REQUEST,
		describe_validation_errors(list(exc.errors())),
	)


def install_error_handlers(app: FastAPI) -> None:
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
	app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
