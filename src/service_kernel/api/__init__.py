"""
Built-in kernel routers.
──────────────────────────────────────────────────────────────
Currently includes:
 - /healthz
 - /servicez
──────────────────────────────────────────────────────────────
"""
from .services_router import router as services_router

__all__ = ["services_router"]
