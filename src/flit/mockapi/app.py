"""Local mock of the fantasy REST backend, served over an in-memory store."""

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..config.logging import get_logger
from ..config.settings import get_settings
from ..events import EventBus, get_event_bus
from ..fantasy import FantasyStore
from .exceptions import setup_exception_handlers
from .routers import router

logger = get_logger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown with the size of the backing store."""
    store: FantasyStore = app.state.store
    logger.info(
        "Starting Flit mock API",
        leagues=len(store.leagues),
        assets=len(store.assets),
        event_bus=app.state.event_bus.name,
    )

    yield

    logger.info(
        "Flit mock API shutdown completed",
        events=app.state.event_bus.get_statistics()["events_published"],
    )


async def add_request_id_middleware(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger.debug(
        "Request started",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        query_params=str(request.query_params),
    )

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    logger.info(
        "Request completed",
        request_id=request_id,
        status_code=response.status_code,
        method=request.method,
        path=request.url.path,
    )
    return response


def create_app(
    store: Optional[FantasyStore] = None, event_bus: Optional[EventBus] = None
) -> FastAPI:
    """
    Create the mock backend application.

    Args:
        store: Store to serve; a seeded store is built when omitted
        event_bus: Bus receiving league and draft events; the global bus by default

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    if store is None:
        store = FantasyStore.from_seed() if settings.mock_seed_enabled else FantasyStore()

    app = FastAPI(
        title="Flit Fantasy Mock API",
        description="In-memory stand-in for the fantasy league backend.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    app.state.store = store
    app.state.event_bus = event_bus or get_event_bus()

    app.middleware("http")(add_request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health", summary="Health Check")
    async def health():
        return {
            "status": "healthy",
            "leagues": len(app.state.store.leagues),
            "environment": settings.environment,
        }

    return app
