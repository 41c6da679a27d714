# service_kernel/di/observers.py
"""
Observer registry
──────────────────────────────────────────────
• key → ordered list of ServiceObserver
• subscribe() is idempotent (identity based)
• notify_* iterates a snapshot, so observers may subscribe or
  unsubscribe while being notified
"""
from __future__ import annotations

from typing import Dict, Hashable, List

from service_kernel.di.capabilities import ServiceObserver


class ObserverRegistry:
    def __init__(self) -> None:
        self._observers: Dict[Hashable, List[ServiceObserver]] = {}

    def subscribe(self, key: Hashable, observer: ServiceObserver) -> bool:
        """Add observer for key. Returns False if it was already subscribed."""
        observers = self._observers.setdefault(key, [])
        if any(o is observer for o in observers):
            return False
        observers.append(observer)
        return True

    def unsubscribe(self, key: Hashable, observer: ServiceObserver) -> bool:
        observers = self._observers.get(key)
        if not observers:
            return False
        for i, o in enumerate(observers):
            if o is observer:
                del observers[i]
                return True
        return False

    def observers_of(self, key: Hashable) -> List[ServiceObserver]:
        return list(self._observers.get(key, ()))

    def notify_registered(self, key: Hashable) -> None:
        for observer in self.observers_of(key):
            observer.on_service_registered(key)

    def notify_unregistered(self, key: Hashable) -> None:
        for observer in self.observers_of(key):
            observer.on_service_unregistered(key)

    def clear(self) -> None:
        self._observers.clear()

    def __len__(self) -> int:
        return sum(len(v) for v in self._observers.values())
