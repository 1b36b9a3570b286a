"""windowstats – Average Calculator API.

REST endpoint that fetches a batch of numbers from the provider, folds
it into the process-wide window and reports the window before and after
together with its rounded average.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from windowstats.core.config import get_config
from windowstats.core.http import require_bearer_token
from windowstats.core.logging import get_logger
from windowstats.core.types import Number
from windowstats.numbers.client import NumbersClient
from windowstats.numbers.types import NumberId
from windowstats.numbers.window import BoundedUniqueWindow
from windowstats.stats.average import average

router = APIRouter(tags=["numbers"])
logger = get_logger(__name__)

UPSTREAM_ERROR = "Failed to fetch numbers from third-party API. Check your Bearer token."


# ============================================================================
# Response Models
# ============================================================================


class AverageResponse(BaseModel):
    """Window state before/after a fetch and the current average."""

    model_config = ConfigDict(populate_by_name=True)

    window_prev_state: List[Number] = Field(alias="windowPrevState")
    window_curr_state: List[Number] = Field(alias="windowCurrState")
    numbers: List[Number]
    avg: float


class AverageErrorResponse(AverageResponse):
    """502 body: the unchanged window plus an error message."""

    error: str


# ============================================================================
# Dependencies
# ============================================================================


_window: Optional[BoundedUniqueWindow] = None
_client: Optional[NumbersClient] = None


def get_number_window() -> BoundedUniqueWindow:
    """Return the process-wide window, created on first use."""

    global _window
    if _window is None:
        _window = BoundedUniqueWindow(capacity=get_config().window_size)
    return _window


def get_numbers_client() -> NumbersClient:
    global _client
    if _client is None:
        _client = NumbersClient.from_config()
    return _client


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/numbers/{numberid}",
    response_model=AverageResponse,
    responses={502: {"model": AverageErrorResponse}},
    summary="Fold the latest numbers into the window",
)
def get_numbers(
    numberid: NumberId = Path(..., description="Series id: p, f, e or r"),
    credential: str = Depends(require_bearer_token),
    window: BoundedUniqueWindow = Depends(get_number_window),
    client: NumbersClient = Depends(get_numbers_client),
):
    """Fetch numbers for ``numberid`` and update the shared window.

    When the provider returns nothing the window is left unchanged and
    the response is a 502 carrying the current window state.
    """

    numbers = client.fetch_numbers(numberid, credential)
    update = window.update(numbers)

    if not numbers:
        logger.warning("No numbers received for series %s", numberid.value)
        body = AverageErrorResponse(
            error=UPSTREAM_ERROR,
            window_prev_state=list(update.previous),
            window_curr_state=list(update.current),
            numbers=[],
            avg=average(update.previous),
        )
        return JSONResponse(status_code=502, content=body.model_dump(by_alias=True))

    return AverageResponse(
        window_prev_state=list(update.previous),
        window_curr_state=list(update.current),
        numbers=numbers,
        avg=average(update.current),
    )
