"""Page Views API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly; reserved paths before the analytics catch-all
    - Storage adapter built once at startup from settings; never per request
    - Realtime publisher built once at startup iff the adapter supports "subscribe"
    - Global error handlers map PageViewsError → {"error": message} responses

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - No CORSMiddleware: the analytics route answers its own preflight (204 +
      Access-Control-Allow-Headers) and every page path is public
    - docs/openapi URLs disabled: "/docs" and friends are ordinary pages here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pageviews.api.error_handlers import register_error_handlers
from pageviews.api.routes import analytics, health, realtime
from pageviews.config import get_settings
from pageviews.infrastructure.adapters import create_storage_adapter
from pageviews.infrastructure.observability import setup_logging
from pageviews.services.realtime_publisher import create_publisher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    storage = await create_storage_adapter(settings)
    publisher = create_publisher(storage, settings)
    app.state.storage = storage
    app.state.publisher = publisher
    logger.info(
        "Page Views API started",
        extra={"adapter": storage.name},
    )
    yield
    logger.info("Page Views API shutting down")
    if publisher is not None:
        publisher.close_all()
    await storage.close()


app = FastAPI(
    title="Page Views API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

register_error_handlers(app)

# Routes — exact reserved paths first, analytics catch-all last
app.include_router(realtime.router)
app.include_router(health.router)
app.include_router(analytics.router)
