# api/changes/views.py
"""
Server-Sent Events stream of change notifications.

Each event only says that a resource changed; clients re-fetch the list.
"""
import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from core import events
from core.deps import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/changes", tags=["changes"])

KEEPALIVE_SECONDS = 30.0


async def _event_stream(request: Request, resource: str):
    async with events.change_feed.subscribe(resource) as queue:
        yield f"event: connected\ndata: {resource}\n\n"
        while True:
            if await request.is_disconnected():
                break
            try:
                changed = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
            except asyncio.TimeoutError:
                yield ": ping\n\n"
                continue
            yield f"event: changed\ndata: {changed}\n\n"
    logger.debug("Change stream for %s closed", resource)


@router.get(
    "/{resource}",
    summary="Subscribe to change notifications for a resource",
    response_class=StreamingResponse,
)
async def stream_changes_endpoint(
    resource: str,
    request: Request,
    current_user: CurrentUser,
) -> StreamingResponse:
    if resource not in events.RESOURCES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown resource '{resource}'",
        )

    return StreamingResponse(
        _event_stream(request, resource),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
