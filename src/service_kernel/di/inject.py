from __future__ import annotations
import types
import weakref
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Dict,
    Hashable,
    List,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from .store import ServiceStore

"""
──────────────────────────────────────────────────────────────────────────────
Injection Slots (Autowiring)
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Find the attributes of a target object that should be filled from the
    locator, and resolve them against the current store.

Mechanics:
    - Reads class-level annotations (include_extras=True)
    - An attribute is a slot when annotated Annotated[T, Inject()] or Injected[T]
    - Inject(key=...) overrides the service key, otherwise the key is T
    - Supports Optional[T]
    - Skips already-initialized attributes

Used by:
    ServiceLocator.inject() / inject_async()

Example:
    class ParentService:
        users: Injected[UsersRepo]
        cache: Annotated[Cache, Inject(key="cache")]

    locator.inject(ParentService(), on_unresolved=...)
"""


@dataclass(frozen=True)
class Inject:
    """Annotation marker for an injection slot."""
    key: Optional[Hashable] = None


class Injected:
    """Shorthand: Injected[T] == Annotated[T, Inject()]."""

    def __class_getitem__(cls, item: Any) -> Any:
        return Annotated[item, Inject()]


@dataclass(frozen=True)
class InjectionSlot:
    name: str
    key: Hashable


def _unwrap_optional(typ: Any) -> Any:
    origin = get_origin(typ)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [a for a in get_args(typ) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return typ


def _marker(metadata: Tuple[Any, ...]) -> Optional[Inject]:
    for m in metadata:
        if isinstance(m, Inject):
            return m
        if m is Inject:
            return Inject()
    return None


def _slot_for(name: str, hint: Any) -> Optional[InjectionSlot]:
    hint = _unwrap_optional(hint)
    if get_origin(hint) is not Annotated:
        return None
    inner, *metadata = get_args(hint)
    marker = _marker(tuple(metadata))
    if marker is None:
        return None
    key = marker.key if marker.key is not None else _unwrap_optional(inner)
    return InjectionSlot(name, key)


# Weak so that classes created at runtime can still be collected.
_SLOT_CACHE: "weakref.WeakKeyDictionary[type, Tuple[InjectionSlot, ...]]" = weakref.WeakKeyDictionary()


def injection_slots(cls: type) -> Tuple[InjectionSlot, ...]:
    """All injection slots declared on cls (and its bases), cached per class."""
    cached = _SLOT_CACHE.get(cls)
    if cached is not None:
        return cached
    hints = get_type_hints(cls, include_extras=True)
    slots: List[InjectionSlot] = []
    for name, hint in hints.items():
        # skip dunder/private names
        if name.startswith("_"):
            continue
        slot = _slot_for(name, hint)
        if slot is not None:
            slots.append(slot)
    _SLOT_CACHE[cls] = tuple(slots)
    return _SLOT_CACHE[cls]


def open_slots(obj: Any) -> List[InjectionSlot]:
    """Slots on obj that are still missing or None."""
    return [
        s for s in injection_slots(obj.__class__)
        if getattr(obj, s.name, None) is None
    ]


def resolve_slots(obj: Any, store: ServiceStore) -> Tuple[Dict[str, Any], List[Hashable]]:
    """
    Resolve obj's open slots against the store.
    Returns (name → instance for resolvable slots, unresolved keys in slot order).
    """
    resolved: Dict[str, Any] = {}
    missing: List[Hashable] = []
    for slot in open_slots(obj):
        if store.contains(slot.key):
            resolved[slot.name] = store.get(slot.key)
        elif slot.key not in missing:
            missing.append(slot.key)
    return resolved, missing


def assign(obj: Any, values: Dict[str, Any]) -> None:
    for name, instance in values.items():
        setattr(obj, name, instance)
