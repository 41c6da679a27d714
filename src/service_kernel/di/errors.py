# service_kernel/di/errors.py
"""
Locator error types
──────────────────────────────────────────────
Only two situations raise:
    • synchronous inject() with unresolved slots and no handler
    • require() on a key that cannot be resolved
Everything else (duplicates, vetoes, lookup misses) is logged and refused.
"""
from __future__ import annotations

from typing import Any, Hashable, Iterable, Tuple


def describe_key(key: Hashable) -> str:
    """Readable name for a service key (classes print as module.Name)."""
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    return repr(key)


class ServiceKernelError(RuntimeError):
    """Base class for all locator errors."""


class UnresolvedDependencyError(ServiceKernelError):
    def __init__(self, target_type: type, missing: Iterable[Hashable]):
        self.target_type = target_type
        self.missing: Tuple[Hashable, ...] = tuple(missing)
        names = ", ".join(describe_key(k) for k in self.missing)
        super().__init__(
            f"{target_type.__name__} has unresolved dependencies ({names}) "
            "and no callback was provided to handle it"
        )


class ServiceNotFoundError(ServiceKernelError, LookupError):
    def __init__(self, key: Hashable, detail: Any = None):
        self.key = key
        msg = f"Service {describe_key(key)} is not registered"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
