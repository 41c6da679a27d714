"""
──────────────────────────────────────────────────────────────────────────────
Optional Capability Protocols
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Describe the hooks the locator calls on registered services, injection
    targets and observers. None of them is mandatory: the locator checks each
    one with isinstance() against a runtime_checkable Protocol, so any object
    exposing the method takes part.

Hooks:
    - ConditionalService.can_be_registered(locator) → veto registration
    - OnServiceRegistered.on_registered(locator)    → after store + sweep
    - OnServiceUnregistered.on_unregistered(locator) → before removal
    - OnInjected.on_injected()                       → after slot assignment
    - ServiceObserver.on_service_registered(key) / on_service_unregistered(key)
──────────────────────────────────────────────────────────────────────────────
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from service_kernel.di.locator import ServiceLocator


@runtime_checkable
class ConditionalService(Protocol):
    def can_be_registered(self, locator: "ServiceLocator") -> bool: ...


@runtime_checkable
class OnServiceRegistered(Protocol):
    def on_registered(self, locator: "ServiceLocator") -> None: ...


@runtime_checkable
class OnServiceUnregistered(Protocol):
    def on_unregistered(self, locator: "ServiceLocator") -> None: ...


@runtime_checkable
class OnInjected(Protocol):
    def on_injected(self) -> None: ...


@runtime_checkable
class ServiceObserver(Protocol):
    """Receives the key only; re-query the locator for the instance."""

    def on_service_registered(self, key: Hashable) -> None: ...

    def on_service_unregistered(self, key: Hashable) -> None: ...
