"""FastAPI application -- entry point for the QTrack API."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qtrack import __version__
from qtrack.config import QTrackConfig
from qtrack_api.deps import Container
from qtrack_api.errors import register_error_handlers
from qtrack_api.routes import (
    analytics,
    collaboration,
    comments,
    quality,
    test_cases,
    test_suites,
    tickets,
    users,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.state.container
    await container.storage.init()
    logger.info("QTrack API started (storage=%s)", container.config.storage_backend)
    try:
        yield
    finally:
        await container.storage.close()
        logger.info("QTrack API stopped")


def create_app(config: QTrackConfig | None = None, container: Container | None = None) -> FastAPI:
    """Build the application. Tests pass a prebuilt ``container``."""
    if container is None:
        container = Container.build(config or QTrackConfig())
    config = container.config

    app = FastAPI(
        title="QTrack API",
        version=__version__,
        description="Tickets, test management and quality gates.",
        lifespan=lifespan,
    )
    app.state.container = container

    # CORS -- allow the local dev frontends
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(tickets.router)
    app.include_router(test_cases.router)
    app.include_router(test_suites.router)
    app.include_router(comments.router)
    app.include_router(users.router)
    app.include_router(analytics.router)
    app.include_router(quality.router)
    app.include_router(collaboration.router)

    @app.get("/health")
    async def health():
        """Unauthenticated health-check endpoint."""
        return {"status": "ok"}

    return app


def main() -> None:
    import uvicorn

    config = QTrackConfig()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(config), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
