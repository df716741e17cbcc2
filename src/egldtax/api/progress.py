"""Progress API — server-sent milestone events for a running report."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from egldtax.api.deps import get_progress_registry, get_settings
from egldtax.config import Settings
from egldtax.infra.progress.registry import ProgressRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


def format_event(message: str) -> str:
    # One data line per event; SSE forbids raw newlines inside it
    return f"data: {' '.join(message.splitlines())}\n\n"


@router.get("/{client_id}")
async def progress_stream(
    client_id: str,
    registry: Annotated[ProgressRegistry, Depends(get_progress_registry)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> StreamingResponse:
    async def events():
        logger.info("Progress stream opened for %s", client_id)
        async for event in registry.stream(client_id, settings.progress_idle_timeout):
            yield format_event(event.message)
        logger.info("Progress stream closed for %s", client_id)

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
