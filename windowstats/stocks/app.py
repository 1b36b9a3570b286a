"""windowstats – Stock Price Aggregator application.

FastAPI application serving the average-price and correlation endpoints.

Run with:
    uvicorn windowstats.stocks.app:app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from windowstats import __version__
from windowstats.core.config import get_config
from windowstats.core.http import build_ops_router, install_error_handlers
from windowstats.core.logging import get_logger
from windowstats.stocks.api import router as stocks_router

SERVICE_NAME = "Stock Price Aggregator"

logger = get_logger(__name__)


# ============================================================================
# Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("%s starting up (upstream %s)", SERVICE_NAME, get_config().upstream.base_url)
    yield
    logger.info("%s shutting down", SERVICE_NAME)


# ============================================================================
# Application Setup
# ============================================================================


def create_app() -> FastAPI:
    app = FastAPI(
        title=SERVICE_NAME,
        description="Average prices and pairwise correlation of upstream stock histories",
        version=__version__,
        lifespan=lifespan,
    )
    install_error_handlers(app)
    app.include_router(build_ops_router(SERVICE_NAME))
    app.include_router(stocks_router)
    return app


app = create_app()
