# src/service_kernel/web/api.py
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Hashable, Iterable, Optional, Tuple, Union

from fastapi import FastAPI

from service_kernel.api.services_router import router as kernel_services_router
from service_kernel.config.base_settings import LocatorSettings
from service_kernel.config.logging import configure_logging
from service_kernel.di.context import get_locator
from service_kernel.di.locator import ServiceLocator
from service_kernel.web.errors import add_error_handlers


"""
──────────────────────────────────────────────────────────────
service_kernel.web.api
──────────────────────────────────────────────────────────────
Purpose:
    FastAPI app factory binding a ServiceLocator to the app lifecycle.

Responsibilities:
    • Bind the locator to app.state.locator on startup
    • Register the startup services handed to create_app()
    • Tear the locator down (unregister_all) on shutdown
    • Add locator error handlers and the kernel routers
──────────────────────────────────────────────────────────────
"""

logger = logging.getLogger(__name__)

# Either an instance (registered under its class) or a (key, instance) pair
StartupService = Union[Any, Tuple[Hashable, Any]]


def _register_startup(locator: ServiceLocator, services: Iterable[StartupService]) -> None:
    for item in services:
        if isinstance(item, tuple) and len(item) == 2:
            key, instance = item
            locator.register(key, instance)
        else:
            locator.register_instance(item)


# ──────────────────────────────────────────────────────────────
# App Factory
# ──────────────────────────────────────────────────────────────
def create_app(
    *,
    title: Optional[str] = None,
    locator: Optional[ServiceLocator] = None,
    settings: Optional[LocatorSettings] = None,
    services: Iterable[StartupService] = (),
    include_kernel_routes: bool = True,
) -> FastAPI:
    """
    Centralized FastAPI factory for locator-backed apps.
    Without an explicit locator the process-wide one (di.context) is used.
    """
    settings = settings or (locator.settings if locator else LocatorSettings())
    configure_logging(settings)
    startup = list(services)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        bound = locator or get_locator()
        app.state.locator = bound
        _register_startup(bound, startup)
        logger.info("[kernel] Locator bound: %r", bound)
        try:
            yield
        finally:
            dropped = bound.unregister_all()
            logger.info("[kernel] Locator torn down (%d pending dropped)", len(dropped))

    app = FastAPI(title=title or settings.app_name, lifespan=lifespan)

    # ──────────────────────────────────────────────────────────
    # 🔹 Locator Error Handlers
    # ──────────────────────────────────────────────────────────
    add_error_handlers(app)

    # ──────────────────────────────────────────────────────────
    # 🔹 Kernel Routers
    # ──────────────────────────────────────────────────────────
    if include_kernel_routes:
        app.include_router(kernel_services_router)
        logger.debug("[kernel] Health and services endpoints mounted")

    return app


# ──────────────────────────────────────────────────────────────
# Router Helper
# ──────────────────────────────────────────────────────────────
def mount_routers(app: FastAPI, routers: list) -> None:
    """Mount multiple routers safely."""
    for r in routers:
        app.include_router(r)
