"""
──────────────────────────────────────────────────────────────
Default Kernel Router: Health, Services
──────────────────────────────────────────────────────────────
Purpose:
    Operational endpoints for apps hosting a ServiceLocator.

Exports:
    router → FastAPI APIRouter instance
──────────────────────────────────────────────────────────────
"""

import time
import platform
from fastapi import APIRouter, Depends

from service_kernel.di.locator import ServiceLocator
from service_kernel.web.deps import get_request_locator

_router_start_time = time.time()

router = APIRouter(prefix="", tags=["system"])


@router.get("/healthz")
async def healthz():
    """Simple health check endpoint."""
    return {"ok": True, "uptime": round(time.time() - _router_start_time, 1)}


@router.get("/servicez")
async def servicez(locator: ServiceLocator = Depends(get_request_locator)):
    """Registered services, parked instances and scheduled completions."""
    state = locator.snapshot()
    state["python"] = platform.python_version()
    state["ready"] = not state["pending"]
    return state
