"""FastAPI application factory for the Waitroom API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from waitroom import __version__
from waitroom.api.routes import monitoring_router, queue_router, waiting_room_router
from waitroom.api.schemas.queue import ServerExceptionResponse
from waitroom.core.config import Config
from waitroom.core.errors import WaitroomError
from waitroom.queue.manager import UserQueueManager
from waitroom.queue.tokens import TokenGenerator
from waitroom.runtime.scheduling import AdmissionScheduler
from waitroom.stores import OrderedStore, create_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start the admission scheduler and release the store on shutdown."""
    scheduler: AdmissionScheduler = app.state.scheduler
    await scheduler.start()

    yield

    await scheduler.stop()
    if app.state.owns_store:
        await app.state.store.close()


async def waitroom_error_handler(request: Request, exc: WaitroomError) -> JSONResponse:
    """Render a WaitroomError as its status code and {code, reason} body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    body = ServerExceptionResponse(code=exc.code, reason=exc.reason)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def create_app(config: Config | None = None, store: OrderedStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The token generator is resolved here so that a missing hash algorithm
    fails at boot rather than on the first request.

    Args:
        config: Application configuration (defaults to Config()).
        store: Pre-built ordered store; when omitted one is created from
            config.store and closed on shutdown.

    Returns:
        Configured FastAPI application instance

    Raises:
        ConfigurationFatalError: If the configured token algorithm is unavailable
    """
    settings = config or Config()

    owns_store = store is None
    if store is None:
        store = create_store(settings.store)
    manager = UserQueueManager(store, TokenGenerator(settings.token.algorithm))
    scheduler = AdmissionScheduler(manager, settings.scheduler)

    app = FastAPI(
        title="Waitroom API",
        description="Virtual waiting room: queue registration, batch admission and admission tokens",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.owns_store = owns_store
    app.state.manager = manager
    app.state.scheduler = scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(WaitroomError, waitroom_error_handler)

    # Waiting room page sits at the root, next to the gateway it serves
    app.include_router(waiting_room_router)

    # Mount routes at /api/v1
    api_v1 = FastAPI()
    api_v1.include_router(queue_router)
    api_v1.include_router(monitoring_router)
    api_v1.add_exception_handler(WaitroomError, waitroom_error_handler)

    # Share state with sub-app so dependencies can reach the manager
    api_v1.state = app.state

    app.mount("/api/v1", api_v1)

    return app
