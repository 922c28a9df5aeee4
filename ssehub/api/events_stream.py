from __future__ import annotations
import asyncio, logging
from typing import AsyncIterator, Optional
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from ssehub.core.config import settings
from ssehub.dependencies import get_hub
from ssehub.infra.hub import Hub
from ssehub.infra.sse import format_comment, format_event
from ssehub.infra.subscription import Subscription

router = APIRouter()
logger = logging.getLogger("api.events_stream")

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def sse_events(
    subscription: Subscription,
    cancel: Optional[asyncio.Event] = None,
    heartbeat: Optional[float] = None,
) -> AsyncIterator[str]:
    """Yield SSE chunks for ``subscription`` and close it when the stream ends.

    Log records carry the subscriber id as their correlation id.
    """
    ids = {"subscriber_id": subscription.id, "correlation_id": subscription.id}
    async with subscription:
        logger.info("client connected", extra={**ids, "event": "connect"})
        try:
            # Send an initial comment to promptly open the stream
            yield format_comment("ok")
            while True:
                try:
                    message = await subscription.next(cancel, timeout=heartbeat or None)
                except asyncio.TimeoutError:
                    yield format_comment("keep-alive")
                    continue
                if message is None:
                    logger.info("stream ended", extra={**ids, "event": "end"})
                    return
                yield format_event(message)
        except (asyncio.CancelledError, GeneratorExit):
            logger.info(
                "client disconnected",
                extra={**ids, "event": "disconnect", "dropped": subscription.dropped},
            )
            raise


async def _hub_stream(hub: Hub) -> AsyncIterator[str]:
    async with hub.register() as subscription:
        async for chunk in sse_events(
            subscription, heartbeat=settings.HEARTBEAT_SECONDS
        ):
            yield chunk


@router.get("/sse")
async def sse(hub: Hub = Depends(get_hub)):
    return StreamingResponse(
        _hub_stream(hub), media_type="text/event-stream", headers=SSE_HEADERS
    )
