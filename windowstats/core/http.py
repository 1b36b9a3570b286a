"""windowstats – HTTP plumbing shared by both services.

Key responsibilities:
- Reject requests without a ``Bearer`` Authorization header before any
  upstream call is made.
- Report request validation failures as HTTP 400.
- Provide the root/health/metrics endpoints every service exposes.

The credential itself is not validated here; it is forwarded to the
upstream provider as-is.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, FastAPI, Header, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from windowstats import __version__
from windowstats.core.logging import get_logger
from windowstats.monitoring.metrics import get_counters

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "
AUTH_ERROR_DETAIL = "Missing or invalid Authorization header. Format: Bearer <token>"


# ============================================================================
# Dependencies
# ============================================================================


def require_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Return the raw Authorization header, or reject with 401."""

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail=AUTH_ERROR_DETAIL)
    return authorization


# ============================================================================
# Error handling
# ============================================================================


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map FastAPI's 422 validation errors to 400."""

    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]


# ============================================================================
# Operational endpoints
# ============================================================================


class CounterResponse(BaseModel):
    """Current value of one in-memory counter."""

    name: str
    value: float
    tags: Dict[str, str] = Field(default_factory=dict)


def build_ops_router(service_name: str) -> APIRouter:
    """Router with ``/``, ``/health`` and ``/metrics`` for a service."""

    router = APIRouter(tags=["ops"])

    @router.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with basic service info."""
        return {
            "service": service_name,
            "version": __version__,
            "status": "operational",
            "docs": "/docs",
        }

    @router.get("/health")
    async def health_check() -> Dict[str, str]:
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    @router.get("/metrics", response_model=List[CounterResponse])
    async def metrics() -> List[CounterResponse]:
        return [
            CounterResponse(name=p.name, value=p.value, tags=dict(p.tags))
            for p in get_counters()
        ]

    return router
