"""FastAPI application entrypoint — lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from safra.config import get_settings
from safra.database import engine
from safra.middleware.errors import install_error_handlers
from safra.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from safra.routes import auth, productions

logger = structlog.get_logger("safra")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Verify the database is reachable

    Shutdown:
      1. Dispose SQLAlchemy engine
    """
    settings = get_settings()
    configure_structured_logging(settings)
    logger.info(
        "Safra API starting",
        log_level=settings.log_level,
        log_format=settings.log_format.value,
    )

    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as exc:
        logger.exception("startup failure", error=str(exc))
        raise

    yield

    logger.info("Safra API shutting down")
    await engine.dispose()


app = FastAPI(
    title="Safra API",
    description=(
        "User accounts with bearer-token authentication and CRUD for "
        "harvest production records linked to farm properties."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
install_error_handlers(app)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "safra",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(auth.router)
app.include_router(productions.router)
