"""Trigger endpoint: start a remote scrape run, at most once per cooldown window."""

import datetime as dt
import logging
import math

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_cooldown_gate, get_settings, get_workflow_dispatcher
from app.config import Settings
from app.schemas.menus import TriggerResponse
from app.services.cooldown import CooldownGate
from app.services.workflow import (
    MissingCredentialsError,
    WorkflowDispatchError,
    WorkflowDispatcher,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scrape"])


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


@router.post("/scrape", response_model=TriggerResponse)
async def trigger_scrape(
    gate: CooldownGate = Depends(get_cooldown_gate),
    dispatcher: WorkflowDispatcher = Depends(get_workflow_dispatcher),
    settings: Settings = Depends(get_settings),
) -> TriggerResponse:
    """
    Start a scrape run unless one was started within the cooldown window.

    Raises:
        HTTPException: 429 inside the cooldown window, 500 when the run
            could not be started
    """
    decision = gate.try_acquire()
    if not decision.accepted:
        window = round(gate.cooldown_seconds / 60)
        logger.info(
            "Scrape trigger rejected, %.0f s of cooldown left", decision.remaining_seconds
        )
        raise HTTPException(
            status_code=429,
            detail=(
                f"Can't refresh more often than every {_plural(window, 'minute')}. "
                f"Please wait {_plural(decision.remaining_minutes, 'more minute')}."
            ),
            headers={"Retry-After": str(math.ceil(decision.remaining_seconds))},
        )

    try:
        await dispatcher.dispatch()
    except MissingCredentialsError:
        if settings.is_development:
            logger.info("Development mode: simulating scrape workflow trigger")
            return TriggerResponse(
                message=(
                    "Scraping started (simulated in development). "
                    "This might take up to 4 minutes."
                ),
                started_at=dt.datetime.now(dt.timezone.utc),
            )
        gate.release(decision.token)
        logger.error("GitHub workflow credentials not configured")
        raise HTTPException(status_code=500, detail="Server configuration error")
    except WorkflowDispatchError as exc:
        gate.release(decision.token)
        logger.error("Failed to trigger scraping: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to trigger scraping")

    return TriggerResponse(
        message="Scraping started. This might take up to 4 minutes.",
        started_at=dt.datetime.now(dt.timezone.utc),
    )
