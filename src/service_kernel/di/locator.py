# service_kernel/di/locator.py
"""
ServiceLocator
──────────────────────────────────────────────────────────────
Type-keyed service registry with deferred dependency resolution.

Responsibilities:
    • One instance per service key (duplicates are logged and refused)
    • Park instances whose declared dependencies are missing and
      promote them once those dependencies register
    • Notify observers on register / unregister
    • Fill injection slots on arbitrary objects, now or later
    • Fire one-shot callbacks when a set of keys becomes available

Every successful register() / unregister() runs a resolution sweep:
    1. retry parked instances, newest first
    2. fire every scheduled set-completion whose keys are all present

Not thread-safe: all entry points are expected to run on one thread
(typically the event loop thread).
──────────────────────────────────────────────────────────────
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Set, Tuple

from service_kernel.config.base_settings import LocatorSettings
from service_kernel.di.capabilities import (
    ConditionalService,
    OnInjected,
    OnServiceRegistered,
    OnServiceUnregistered,
    ServiceObserver,
)
from service_kernel.di.declarations import DeclarationTable, declarations as default_declarations
from service_kernel.di.errors import ServiceNotFoundError, UnresolvedDependencyError, describe_key
from service_kernel.di.fallback import DefaultFallback, ServiceFallback
from service_kernel.di.inject import assign, resolve_slots
from service_kernel.di.observers import ObserverRegistry
from service_kernel.di.pending import CompletionScheduler, PendingQueue
from service_kernel.di.store import ServiceStore

logger = logging.getLogger(__name__)

# Teardown passes before services re-registered by unregister hooks are dropped.
MAX_TEARDOWN_ROUNDS = 8


class ServiceLocator:
    def __init__(
        self,
        settings: Optional[LocatorSettings] = None,
        declarations: Optional[DeclarationTable] = None,
        fallback: Optional[ServiceFallback] = None,
    ):
        self.settings = settings or LocatorSettings()
        self.declarations = declarations if declarations is not None else default_declarations
        self.fallback: ServiceFallback = fallback or DefaultFallback()

        self._store = ServiceStore()
        self._observers = ObserverRegistry()
        self._pending = PendingQueue()
        self._completions = CompletionScheduler()
        self._waiters: Dict[Hashable, List[asyncio.Future]] = {}
        self._unregistering: Set[Hashable] = set()

    def __repr__(self) -> str:
        return (
            f"<ServiceLocator services={len(self._store)} pending={len(self._pending)} "
            f"completions={len(self._completions)}>"
        )

    # ──────────────────────────────────────────────
    # Registration
    # ──────────────────────────────────────────────
    def register(self, key: Hashable, instance: Any) -> bool:
        """
        Register instance under key.

        Returns True when the instance entered the store. Returns False when
        it was refused (duplicate key, vetoed) or parked until its declared
        dependencies are registered.
        """
        if not self._can_register(key, instance):
            return False

        if not self._dependencies_resolved(instance):
            if self._pending.add(key, instance):
                logger.debug(
                    "[locator] %s parked, waiting on %s",
                    describe_key(key),
                    ", ".join(describe_key(k) for k in self._missing_dependencies(instance)),
                )
            return False

        self._store.add(key, instance)
        logger.debug("[locator] Registered %s", describe_key(key))
        self._sweep()
        self._dispatch_registered(key, instance)
        return True

    def register_instance(self, instance: Any) -> bool:
        """Register instance under its own class."""
        return self.register(type(instance), instance)

    def _can_register(self, key: Hashable, instance: Any) -> bool:
        if instance is None:
            logger.error("[locator] Refusing to register None for %s", describe_key(key))
            return False

        if self._store.contains(key):
            logger.error("[locator] Service of type %s is already registered.", describe_key(key))
            return False

        if isinstance(instance, ConditionalService) and not instance.can_be_registered(self):
            logger.debug("[locator] %s declined registration", describe_key(key))
            return False

        return True

    def _dependencies_resolved(self, instance: Any) -> bool:
        return self._store.contains_all(self.declarations.depends_on(type(instance)))

    def _missing_dependencies(self, instance: Any) -> List[Hashable]:
        return self._store.missing(self.declarations.depends_on(type(instance)))

    def _dispatch_registered(self, key: Hashable, instance: Any) -> None:
        if isinstance(instance, OnServiceRegistered):
            instance.on_registered(self)

        self._observers.notify_registered(key)

        for fut in self._waiters.pop(key, []):
            if not fut.done() and not fut.get_loop().is_closed():
                fut.set_result(instance)

    # ──────────────────────────────────────────────
    # Unregistration
    # ──────────────────────────────────────────────
    def unregister(self, key: Hashable) -> bool:
        if not self._store.contains(key) or key in self._unregistering:
            return False

        instance = self._store.get(key)
        self._unregistering.add(key)
        try:
            if isinstance(instance, OnServiceUnregistered):
                instance.on_unregistered(self)
            self._observers.notify_unregistered(key)
            self._store.remove(key)
        finally:
            self._unregistering.discard(key)

        logger.debug("[locator] Unregistered %s", describe_key(key))
        self._sweep()
        return True

    def unregister_instance(self, instance: Any) -> bool:
        """Unregister whatever is registered under instance's own class."""
        return self.unregister(type(instance))

    def unregister_all(self) -> List[Any]:
        """
        Tear everything down, newest registration first.

        Services registered by an on_unregistered hook during teardown are
        torn down as well, in further passes.

        Returns the instances that were still parked waiting on dependencies;
        they are discarded together with every observer.
        """
        rounds = 0
        while len(self._store) and rounds < MAX_TEARDOWN_ROUNDS:
            for key, _ in reversed(self._store.items()):
                self.unregister(key)
            rounds += 1

        if len(self._store):
            logger.warning(
                "[locator] Discarding services still registered after %d teardown passes: %s",
                rounds,
                ", ".join(describe_key(k) for k in self._store),
            )
            self._store.clear()

        dropped = [entry.instance for entry in self._pending.drain()]
        if dropped:
            logger.warning(
                "[locator] %d dependencies were waiting to be resolved: %s",
                len(dropped),
                ", ".join(type(i).__name__ for i in dropped),
            )
        self._observers.clear()

        if self.settings.clear_completions_on_reset:
            self._completions.clear()
        return dropped

    # ──────────────────────────────────────────────
    # Resolution sweep
    # ──────────────────────────────────────────────
    def _sweep(self) -> None:
        for entry in self._pending.newest_first():
            # a nested register() may already have promoted it
            if not self._pending.contains(entry):
                continue
            if not self._dependencies_resolved(entry.instance):
                continue
            self._pending.remove(entry)
            self.register(entry.key, entry.instance)

        for completion in self._completions.snapshot():
            if not self._store.contains_all(completion.keys):
                continue
            if not self._completions.take(completion):
                continue
            completion.callback()

    # ──────────────────────────────────────────────
    # Lookup
    # ──────────────────────────────────────────────
    def has(self, key: Hashable) -> bool:
        return self._store.contains(key)

    def has_all(self, keys: Iterable[Hashable]) -> bool:
        return self._store.contains_all(keys)

    def peek(self, key: Hashable) -> Optional[Any]:
        """Registered instance or None; never logs, never uses the fallback."""
        return self._store.get(key)

    def get(self, key: Hashable) -> Optional[Any]:
        if self._store.contains(key):
            return self._store.get(key)

        if self.settings.is_live:
            logger.error(
                "[locator] The service %s is not yet registered on the locator, "
                "consider declaring it as a dependency",
                describe_key(key),
            )
            return None

        return self._from_fallback(key)

    def require(self, key: Hashable) -> Any:
        """Like get(), but raise ServiceNotFoundError instead of returning None."""
        if self._store.contains(key):
            return self._store.get(key)
        if self.settings.is_live:
            raise ServiceNotFoundError(key)
        instance = self._from_fallback(key)
        if instance is None:
            raise ServiceNotFoundError(key, "no fallback available")
        return instance

    def _from_fallback(self, key: Hashable) -> Optional[Any]:
        instance = self.fallback.find_fallback_instance(key)
        if instance is not None:
            return instance
        return self.fallback.construct_default(key)

    def keys(self) -> List[Hashable]:
        return list(self._store)

    @property
    def pending(self) -> List[Tuple[Hashable, Any]]:
        return [(e.key, e.instance) for e in self._pending.entries()]

    @property
    def scheduled_completions(self) -> int:
        return len(self._completions)

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly view of the locator state."""
        return {
            "services": [describe_key(k) for k in self._store],
            "pending": [
                {
                    "key": describe_key(e.key),
                    "waiting_on": [describe_key(k) for k in self._missing_dependencies(e.instance)],
                }
                for e in self._pending.entries()
            ],
            "completions": [
                sorted(describe_key(k) for k in c.keys) for c in self._completions.snapshot()
            ],
            "execution_context": self.settings.execution_context.value,
        }

    # ──────────────────────────────────────────────
    # Observers
    # ──────────────────────────────────────────────
    def subscribe(self, key: Hashable, observer: ServiceObserver) -> None:
        if not isinstance(observer, ServiceObserver):
            raise TypeError(f"{type(observer).__name__} does not implement ServiceObserver")
        self._observers.subscribe(key, observer)

    def unsubscribe(self, key: Hashable, observer: ServiceObserver) -> None:
        self._observers.unsubscribe(key, observer)

    # ──────────────────────────────────────────────
    # Set completion
    # ──────────────────────────────────────────────
    def when_available(self, keys: Iterable[Hashable], callback: Callable[[], Any]) -> bool:
        """
        Call callback once every key is registered.
        Fires immediately (and returns True) when they already are.
        """
        keys = tuple(keys)
        if self._store.contains_all(keys):
            callback()
            return True
        self._completions.schedule(keys, callback)
        return False

    # ──────────────────────────────────────────────
    # Injection
    # ──────────────────────────────────────────────
    def inject(self, target: Any, on_unresolved: Optional[Callable[[], Any]] = None) -> bool:
        """
        Fill target's injection slots.

        Returns True if everything resolved now. Otherwise, when on_unresolved
        is given, the injection completes on a later registration and
        on_unresolved is called after target.on_injected(); returns False.
        Without on_unresolved an unresolved slot raises UnresolvedDependencyError.
        """
        values, missing = resolve_slots(target, self._store)
        if not missing:
            assign(target, values)
            self._notify_injected(target)
            return True

        if on_unresolved is None:
            raise UnresolvedDependencyError(type(target), missing)

        logger.debug(
            "[locator] Deferring injection of %s until %s",
            type(target).__name__,
            ", ".join(describe_key(k) for k in missing),
        )

        def _complete() -> None:
            values, still_missing = resolve_slots(target, self._store)
            if still_missing:
                self._completions.schedule(still_missing, _complete)
                return
            assign(target, values)
            self._notify_injected(target)
            on_unresolved()

        self._completions.schedule(missing, _complete)
        return False

    async def inject_async(self, target: Any, cancel: Optional[asyncio.Event] = None) -> None:
        """
        Fill target's injection slots, suspending until every missing
        service is registered. Setting cancel (or cancelling the task)
        raises asyncio.CancelledError and leaves the locator untouched.
        """
        while True:
            values, missing = resolve_slots(target, self._store)
            if not missing:
                break
            waits = [asyncio.ensure_future(self.wait_for_service(k, cancel)) for k in missing]
            try:
                await asyncio.gather(*waits)
            finally:
                for w in waits:
                    if not w.done():
                        w.cancel()
                await asyncio.gather(*waits, return_exceptions=True)

        assign(target, values)
        self._notify_injected(target)

    async def wait_for_service(self, key: Hashable, cancel: Optional[asyncio.Event] = None) -> Any:
        """
        Return the instance for key, waiting for its registration if needed.

        A wakeup only means key was registered at some point; if it was
        unregistered again before this coroutine resumed, wait again.
        """
        while not self._store.contains(key):
            await self._wait_registration(key, cancel)
        return self._store.get(key)

    async def _wait_registration(self, key: Hashable, cancel: Optional[asyncio.Event]) -> None:
        if cancel is not None and cancel.is_set():
            raise asyncio.CancelledError(f"wait for {describe_key(key)} cancelled")

        loop = asyncio.get_running_loop()
        fut: asyncio.Future = loop.create_future()
        self._waiters.setdefault(key, []).append(fut)
        cancel_task: Optional[asyncio.Task] = None
        try:
            if cancel is None:
                await fut
                return
            cancel_task = loop.create_task(cancel.wait())
            done, _ = await asyncio.wait({fut, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
            if fut in done:
                return
            raise asyncio.CancelledError(f"wait for {describe_key(key)} cancelled")
        finally:
            if cancel_task is not None:
                cancel_task.cancel()
            if not fut.done():
                fut.cancel()
            self._discard_waiter(key, fut)

    def waiter_count(self, key: Hashable) -> int:
        return len(self._waiters.get(key, ()))

    def _discard_waiter(self, key: Hashable, fut: asyncio.Future) -> None:
        waiters = self._waiters.get(key)
        if not waiters:
            return
        self._waiters[key] = [w for w in waiters if w is not fut]
        if not self._waiters[key]:
            del self._waiters[key]

    @staticmethod
    def _notify_injected(target: Any) -> None:
        if isinstance(target, OnInjected):
            target.on_injected()
