from __future__ import annotations
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Tuple

"""
──────────────────────────────────────────────────────────────────────────────
Service Store
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Map a service key → exactly one registered instance.

APIs:
    - add(key, instance)  (refuses duplicates)
    - get(key) → instance | None
    - contains(key) / contains_all(keys)
    - remove(key) → instance | None
    - items() in insertion order

Used by:
    - ServiceLocator → the single source of truth for "is K registered?"

Usage:
    store = ServiceStore()
    store.add(MyRepo, MyRepo())
    repo = store.get(MyRepo)
"""


class ServiceStore:
    def __init__(self) -> None:
        # dict keeps insertion order; unregister_all() relies on it
        self._instances: Dict[Hashable, Any] = {}

    def add(self, key: Hashable, instance: Any) -> bool:
        if key in self._instances:
            return False
        self._instances[key] = instance
        return True

    def get(self, key: Hashable) -> Any:
        return self._instances.get(key)

    def contains(self, key: Hashable) -> bool:
        return key in self._instances

    def contains_all(self, keys: Iterable[Hashable]) -> bool:
        return all(k in self._instances for k in keys)

    def missing(self, keys: Iterable[Hashable]) -> List[Hashable]:
        return [k for k in keys if k not in self._instances]

    def remove(self, key: Hashable) -> Any:
        return self._instances.pop(key, None)

    def items(self) -> List[Tuple[Hashable, Any]]:
        return list(self._instances.items())

    def clear(self) -> None:
        self._instances.clear()

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._instances))
