# service_kernel/di/fallback.py
"""
Host collaborators for lookup misses
──────────────────────────────────────────────
In the AUTHORING execution context, get() on an unregistered key asks:
    1. find_fallback_instance(key) → an existing object the host knows of
    2. construct_default(key)      → a throwaway default instance
Neither result is registered on the locator.
"""
from __future__ import annotations

import logging
from typing import Any, Hashable, Optional, Protocol, runtime_checkable

from service_kernel.di.errors import describe_key

logger = logging.getLogger(__name__)


@runtime_checkable
class ServiceFallback(Protocol):
    def find_fallback_instance(self, key: Hashable) -> Optional[Any]: ...

    def construct_default(self, key: Hashable) -> Optional[Any]: ...


class DefaultFallback:
    """Finds nothing; constructs classes that take no arguments."""

    def find_fallback_instance(self, key: Hashable) -> Optional[Any]:
        return None

    def construct_default(self, key: Hashable) -> Optional[Any]:
        if not isinstance(key, type):
            logger.error("[locator] Cannot construct a default for non-type key %s", describe_key(key))
            return None
        try:
            return key()
        except TypeError as e:
            logger.error("[locator] Failed to construct default %s: %s", describe_key(key), e)
            return None
