from typing import Optional

import structlog
from fastapi import FastAPI

from greenmarket.config import settings
from greenmarket.infrastructure.api.errors import register_error_handlers
from greenmarket.infrastructure.api.routes import router
from greenmarket.infrastructure.bootstrap import Container, container
from greenmarket.infrastructure.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def create_app(app_container: Optional[Container] = None) -> FastAPI:
    """Build the HTTP app.

    Tests pass their own container; otherwise the process-wide one from
    ``bootstrap`` is used.
    """
    configure_logging(settings.LOG_LEVEL, json=settings.LOG_JSON)

    app = FastAPI(
        title="Greenmarket",
        description="Farm-to-consumer marketplace: orders, stock and transport",
        version="1.0.0",
    )
    app.state.container = app_container or container()
    app.include_router(router, prefix="/api")
    register_error_handlers(app)

    @app.get("/api/health")
    def health():
        return {"status": "healthy"}

    logger.info("app_created", storage=settings.STORAGE_BACKEND)
    return app
