from __future__ import annotations
from typing import Callable, Dict, Hashable, List, Optional, Tuple, TypeVar

"""
──────────────────────────────────────────────────────────────────────────────
Dependency Declarations
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Keep an explicit table of class → service keys it requires before an
    instance of it may be registered.

APIs:
    - DeclarationTable.declare(cls, *keys)
    - DeclarationTable.depends_on(cls) → tuple of keys (MRO union)
    - service_implementation(*keys) → class decorator

Used by:
    - BaseService.__init_subclass__() → declares `depends_on=` kwargs
    - ServiceLocator → checks declarations before accepting a registration

Usage:
    @service_implementation(Database, Cache)
    class UsersRepo: ...

    declarations.depends_on(UsersRepo)  # (Database, Cache)
"""

C = TypeVar("C", bound=type)


class DeclarationTable:
    """
    Class → required keys. A table with a `parent` also reports the
    parent's declarations; writes only land in the table itself.
    """

    def __init__(self, parent: Optional["DeclarationTable"] = None) -> None:
        self._table: Dict[type, Tuple[Hashable, ...]] = {}
        self.parent = parent

    def declare(self, cls: type, *keys: Hashable) -> None:
        """Record (or extend) the declaration of cls itself."""
        existing = self._table.get(cls, ())
        merged = list(existing)
        for k in keys:
            if k not in merged:
                merged.append(k)
        self._table[cls] = tuple(merged)

    def own(self, cls: type) -> Tuple[Hashable, ...]:
        return self._table.get(cls, ())

    def depends_on(self, cls: type) -> Tuple[Hashable, ...]:
        """Keys required by cls, including those declared on its bases."""
        out: List[Hashable] = list(self.parent.depends_on(cls)) if self.parent is not None else []
        for klass in reversed(cls.__mro__):
            for k in self._table.get(klass, ()):
                if k not in out:
                    out.append(k)
        return tuple(out)

    def forget(self, cls: type) -> None:
        self._table.pop(cls, None)

    def clear(self) -> None:
        self._table.clear()

    def __contains__(self, cls: object) -> bool:
        if cls in self._table:
            return True
        return self.parent is not None and cls in self.parent

    def __len__(self) -> int:
        return len(self._table)


# Process-wide default table, populated at import time by decorators.
declarations = DeclarationTable()


def service_implementation(
    *depends_on: Hashable, table: Optional[DeclarationTable] = None
) -> Callable[[C], C]:
    """Class decorator declaring the service keys a class needs first."""
    target = table if table is not None else declarations

    def _decorate(cls: C) -> C:
        target.declare(cls, *depends_on)
        return cls

    return _decorate
