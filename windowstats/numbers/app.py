"""windowstats – Average Calculator application.

FastAPI application serving the number window endpoint.

Run with:
    uvicorn windowstats.numbers.app:app --host 0.0.0.0 --port 9876
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from windowstats import __version__
from windowstats.core.http import build_ops_router, install_error_handlers
from windowstats.core.logging import get_logger
from windowstats.numbers.api import get_number_window, router as numbers_router

SERVICE_NAME = "Average Calculator"

logger = get_logger(__name__)


# ============================================================================
# Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    window = get_number_window()
    logger.info("%s starting up (window capacity %d)", SERVICE_NAME, window.capacity)
    yield
    logger.info("%s shutting down", SERVICE_NAME)


# ============================================================================
# Application Setup
# ============================================================================


def create_app() -> FastAPI:
    app = FastAPI(
        title=SERVICE_NAME,
        description="Bounded unique window of upstream numbers with a running average",
        version=__version__,
        lifespan=lifespan,
    )
    install_error_handlers(app)
    app.include_router(build_ops_router(SERVICE_NAME))
    app.include_router(numbers_router)
    return app


app = create_app()
