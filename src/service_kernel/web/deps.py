# service_kernel/web/deps.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Hashable
from fastapi import HTTPException, Request, status

from service_kernel.di.locator import ServiceLocator


def get_request_locator(request: Request) -> ServiceLocator:
    """
    Access the ServiceLocator bound by create_app()'s lifespan.
    Raises 500 if none is bound (should never happen with create_app()).
    """
    locator: ServiceLocator | None = getattr(request.app.state, "locator", None)
    if locator is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No service locator bound to app",
        )
    return locator


def service_dependency(key: Hashable) -> Callable[[Request], Awaitable[Any]]:
    """
    FastAPI dependency returning the service registered under key.

    Usage:
        from service_kernel.web.deps import service_dependency
        @router.get("/users")
        async def users(repo: UsersRepo = Depends(service_dependency(UsersRepo))): ...

    Raises ServiceNotFoundError (→ 503 via add_error_handlers) when missing.
    Runs on the event loop, never in the threadpool, so locator access stays
    on one thread.
    """

    async def _resolve(request: Request) -> Any:
        return get_request_locator(request).require(key)

    return _resolve
