# service_kernel/web/errors.py
from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from service_kernel.di.errors import ServiceNotFoundError, UnresolvedDependencyError, describe_key

logger = logging.getLogger(__name__)


def error_envelope(code: str, message: str, details=None):
    return {"error": {"code": code, "message": message, "details": details or {}}}


async def service_not_found_handler(request: Request, exc: ServiceNotFoundError):
    return JSONResponse(
        error_envelope("SERVICE_UNAVAILABLE", str(exc), {"key": describe_key(exc.key)}),
        status_code=503,
    )


async def unresolved_dependency_handler(request: Request, exc: UnresolvedDependencyError):
    logger.error("[locator] %s", exc)
    return JSONResponse(
        error_envelope(
            "SERVICE_UNAVAILABLE",
            "Dependencies not yet available",
            {"target": exc.target_type.__name__, "missing": [describe_key(k) for k in exc.missing]},
        ),
        status_code=503,
    )


def add_error_handlers(app: FastAPI) -> None:
    """Map locator errors raised inside request handlers to 503 envelopes."""
    app.add_exception_handler(ServiceNotFoundError, service_not_found_handler)
    app.add_exception_handler(UnresolvedDependencyError, unresolved_dependency_handler)
    logger.debug("[kernel] Locator error handlers registered")
