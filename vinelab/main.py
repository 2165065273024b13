"""FastAPI application entrypoint: lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vinelab import __version__
from vinelab.config import get_settings
from vinelab.engine import default_engine
from vinelab.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from vinelab.routes import lab_tests

logger = logging.getLogger("vinelab")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Build the default rule tables so table errors surface at boot
    """
    settings = get_settings()
    configure_structured_logging(settings)
    engine = default_engine()
    logger.info(
        "vinelab starting",
        extra={
            "log_level": settings.log_level,
            "rule_sets": sorted(test_type.value for test_type in engine.tables.rule_sets),
        },
    )

    yield

    logger.info("vinelab shutting down")


settings = get_settings()

app = FastAPI(
    title="VineLab API",
    description=(
        "Lab-test interpretation API for grape vineyards: soil and petiole "
        "recommendations, fertilizer schedules and retest reminders."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check: the API process is alive."""
    return {
        "status": "ok",
        "service": "vinelab",
        "version": __version__,
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(lab_tests.router, prefix=settings.api_prefix)
