import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from ssehub.core.config import settings
from ssehub.core.cors import PermissiveCORSMiddleware
from ssehub.core.logging import setup_logging
from ssehub.dependencies import get_hub
from ssehub.infra.hub import Hub
from ssehub.api.schemas import HealthOut

setup_logging()
logger = logging.getLogger("ssehub.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("starting %s", settings.APP_NAME)
    yield
    # end open streams so the server can finish shutting down
    get_hub().close()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(PermissiveCORSMiddleware)

from ssehub.api.stream_routes import router as stream_router
from ssehub.api.events_stream import router as events_router

app.include_router(stream_router)
app.include_router(events_router)


@app.get("/health", response_model=HealthOut)
def health(hub: Hub = Depends(get_hub)):
    return HealthOut(
        status="ok",
        app=settings.APP_NAME,
        subscribers=hub.subscriber_count,
        published=hub.published,
        dropped=hub.dropped,
    )
