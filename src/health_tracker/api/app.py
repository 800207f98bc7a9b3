"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from health_tracker.api.routes import router
from health_tracker.app_logging import configure_logging
from health_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Health tracker starting",
            extra={"environment": container.settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Health Tracker", lifespan=lifespan)
    app.state.container = container

    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
