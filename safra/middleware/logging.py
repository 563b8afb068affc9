"""Structured logging setup and per-request access logs with request IDs."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from safra.config import LogFormat, Settings, get_settings

REQUEST_ID_HEADER = "x-request-id"
_QUIET_PATHS = ("/health",)

_configured = False


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Configure stdlib + structlog once per process.

	Library loggers (uvicorn, sqlalchemy) go through the same renderer via
	``ProcessorFormatter`` so every line shares one format.
	"""
	global _configured
	if _configured:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	shared_processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.stdlib.add_logger_name,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
	]

	renderer: Any
	if settings.log_format == LogFormat.json:
		renderer = structlog.processors.JSONRenderer()
	else:
		renderer = structlog.dev.ConsoleRenderer()

	formatter = structlog.stdlib.ProcessorFormatter(
		foreign_pre_chain=shared_processors,
		processors=[
			structlog.stdlib.ProcessorFormatter.remove_processors_meta,
			structlog.processors.format_exc_info,
			renderer,
		],
	)
	handler = logging.StreamHandler()
	handler.setFormatter(formatter)
	root = logging.getLogger()
	root.handlers = [handler]
	root.setLevel(log_level)

	structlog.configure(
		processors=[
			*shared_processors,
			structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.stdlib.LoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind a request ID to the log context and emit one access line per request."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
		request.state.request_id = request_id

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id)

		logger = structlog.get_logger("safra.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"http_request_failed",
				method=request.method,
				path=request.url.path,
				duration_ms=_elapsed_ms(start),
				error=str(exc),
			)
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		if request.url.path not in _QUIET_PATHS:
			logger.info(
				"http_request",
				method=request.method,
				path=request.url.path,
				status_code=response.status_code,
				client=request.client.host if request.client else None,
				duration_ms=_elapsed_ms(start),
			)
		return response


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)
