# service_kernel/di/pending.py
"""
Deferred work held by the locator
──────────────────────────────────────────────
• PendingQueue        → instances parked until their declared
                         dependencies are registered
• CompletionScheduler → one-shot callbacks keyed on a set of
                         service keys

Both are plain containers. The locator drives them from its
resolution sweep; they never touch the store themselves.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Hashable, Iterable, List


@dataclass(eq=False)
class PendingEntry:
    key: Hashable
    instance: Any


class PendingQueue:
    """Ordered, deduplicated (by instance identity) holding area."""

    def __init__(self) -> None:
        self._entries: List[PendingEntry] = []

    def add(self, key: Hashable, instance: Any) -> bool:
        if self.contains_instance(instance):
            return False
        self._entries.append(PendingEntry(key, instance))
        return True

    def contains_instance(self, instance: Any) -> bool:
        return any(e.instance is instance for e in self._entries)

    def contains(self, entry: PendingEntry) -> bool:
        return any(e is entry for e in self._entries)

    def remove(self, entry: PendingEntry) -> bool:
        for i, e in enumerate(self._entries):
            if e is entry:
                del self._entries[i]
                return True
        return False

    def newest_first(self) -> List[PendingEntry]:
        """Snapshot, most recently parked first."""
        return list(reversed(self._entries))

    def entries(self) -> List[PendingEntry]:
        return list(self._entries)

    def drain(self) -> List[PendingEntry]:
        dropped, self._entries = self._entries, []
        return dropped

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(eq=False)
class SetCompletion:
    keys: FrozenSet[Hashable]
    callback: Callable[[], Any] = field(repr=False)


class CompletionScheduler:
    """
    Holds (key set, callback) entries. Identical sets may be scheduled
    several times; each entry is its own object and fires once.
    """

    def __init__(self) -> None:
        self._entries: List[SetCompletion] = []

    def schedule(self, keys: Iterable[Hashable], callback: Callable[[], Any]) -> SetCompletion:
        entry = SetCompletion(frozenset(keys), callback)
        self._entries.append(entry)
        return entry

    def snapshot(self) -> List[SetCompletion]:
        return list(self._entries)

    def take(self, entry: SetCompletion) -> bool:
        """Remove entry; False if a nested sweep already took it."""
        for i, e in enumerate(self._entries):
            if e is entry:
                del self._entries[i]
                return True
        return False

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
