from __future__ import annotations
import logging
from fastapi import APIRouter, Depends
from ssehub.api.schemas import PublishOut, PublishReq
from ssehub.core.producer import MessageCounter
from ssehub.dependencies import get_counter, get_hub
from ssehub.infra.hub import Hub

router = APIRouter()
logger = logging.getLogger("api.stream_routes")


def _publish(hub: Hub, message: str) -> PublishOut:
    delivered = hub.publish(message)
    logger.info("message published", extra={"event": "publish", "delivered": delivered})
    return PublishOut(message=message, delivered=delivered)


@router.get("/say", response_model=PublishOut)
async def say(
    hub: Hub = Depends(get_hub), counter: MessageCounter = Depends(get_counter)
):
    return _publish(hub, counter.next_message())


@router.post("/publish", response_model=PublishOut)
async def publish(req: PublishReq, hub: Hub = Depends(get_hub)):
    return _publish(hub, req.message)
