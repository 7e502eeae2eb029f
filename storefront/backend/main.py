# storefront/backend/main.py
"""
Development backend for the storefront client.

An in-memory FastAPI app that honours the same REST contract as the
production backend (/api/cart, /api/auth, /api/products, /api/settings,
/api/upload), so the client and CLI can be run and tested locally.

Start it with `storefront serve` or `uvicorn storefront.backend.main:app`.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from storefront.backend.api.deps import BackendServices
from storefront.backend.api.v1.api_router import api_router
from storefront.backend.error_handlers import setup_error_handlers
from storefront.backend.services.auth_service import AuthService
from storefront.backend.services.cart_service import CartService
from storefront.backend.services.catalog_service import CatalogService
from storefront.backend.services.settings_service import SettingsService
from storefront.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def build_services(settings: Settings) -> BackendServices:
    """Fresh in-memory services, with the configured admin account seeded."""
    auth = AuthService()
    auth.register("Admin", settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, role="admin")
    return BackendServices(
        settings=settings,
        auth=auth,
        catalog=CatalogService(),
        carts=CartService(),
        site=SettingsService(),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Creates an app with its own in-memory data."""
    settings = settings or default_settings

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} (development backend)",
        version=settings.PROJECT_VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        description="In-memory backend implementing the storefront REST contract",
    )
    app.state.services = build_services(settings)

    setup_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def read_root():
        """Basic liveness check."""
        return {"message": f"Welcome to {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

    logger.info(f"Development backend ready, API under {settings.API_PREFIX}")
    return app


app = create_app()
