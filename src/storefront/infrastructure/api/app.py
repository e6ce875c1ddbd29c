"""
app.py — FastAPI Entry Point

Builds the HTTP application around the order and cart use cases. Nothing
happens at import time: ``create_app()`` configures logging, and the store
is opened lazily on the first request that needs it.

Run with ``storefront serve`` or
``uvicorn --factory storefront.infrastructure.api.app:create_app``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.api.cart_routes import router as cart_router
from storefront.infrastructure.api.errors import register_error_handlers
from storefront.infrastructure.api.routes import router as order_router
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.logging_config import setup_logging

log = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    unit_of_work: Optional[Callable[[], UnitOfWork]] = None,
) -> FastAPI:
    """Create the API application.

    Args:
        settings: Defaults to the environment-derived settings.
        unit_of_work: Unit-of-work factory to use instead of the configured store.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title="Storefront API")
    app.state.settings = settings
    app.state.unit_of_work = unit_of_work

    register_error_handlers(app)
    app.include_router(order_router, prefix="/api/v1")
    app.include_router(cart_router, prefix="/api/v1")

    @app.get("/health")
    def health_check():
        """Liveness check for container orchestrators."""
        return {"status": "ok"}

    log.info(f"Storefront API created (environment={settings.environment})")
    return app

