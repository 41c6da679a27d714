# service_kernel/di/context.py
"""
Process-wide ServiceLocator accessor
────────────────────────────────────────────
Most code should receive a ServiceLocator explicitly. This module only
exists for code that needs ambient access (module-level helpers,
BaseService without an explicit locator).

Used by:
    • services.base_service (default locator)
    • testing.fixtures (global_locator fixture)
    • web.api (when create_app() gets no locator)
"""

from __future__ import annotations
from typing import Optional

from service_kernel.config.base_settings import LocatorSettings
from service_kernel.di.locator import ServiceLocator

_locator: Optional[ServiceLocator] = None


def get_locator() -> ServiceLocator:
    """Return the process-wide locator, creating it lazily from settings."""
    global _locator
    if _locator is None:
        _locator = ServiceLocator(LocatorSettings())
    return _locator


def set_locator(locator: ServiceLocator) -> None:
    """Replace the process-wide locator (e.g., in a FastAPI lifespan or tests)."""
    global _locator
    _locator = locator


def reset_locator() -> None:
    """Tear down the process-wide locator and forget it."""
    global _locator
    if _locator is not None:
        _locator.unregister_all()
    _locator = None
