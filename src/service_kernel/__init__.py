# service_kernel/__init__.py
"""
service_kernel
──────────────────────────────────────────────────────────────
A process-wide service locator with deferred dependency resolution.
Provides:
    - Type-keyed registration (one instance per key)
    - Dependency declarations with automatic deferred promotion
    - Observers for register / unregister events
    - Slot injection (sync with callback, or async)
    - One-shot callbacks on sets of services
    - Optional FastAPI lifecycle integration
──────────────────────────────────────────────────────────────
"""

__version__ = "0.2.0"

from service_kernel.config.base_settings import ExecutionContext, LocatorSettings
from service_kernel.di.context import get_locator, reset_locator, set_locator
from service_kernel.di.declarations import DeclarationTable, declarations, service_implementation
from service_kernel.di.errors import ServiceKernelError, ServiceNotFoundError, UnresolvedDependencyError
from service_kernel.di.inject import Inject, Injected
from service_kernel.di.locator import ServiceLocator
from service_kernel.autodiscover import discover_services

__all__ = [
    "DeclarationTable",
    "ExecutionContext",
    "Inject",
    "Injected",
    "LocatorSettings",
    "ServiceKernelError",
    "ServiceLocator",
    "ServiceNotFoundError",
    "UnresolvedDependencyError",
    "declarations",
    "discover_services",
    "get_locator",
    "reset_locator",
    "service_implementation",
    "set_locator",
]
