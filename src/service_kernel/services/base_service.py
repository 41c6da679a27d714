# service_kernel/services/base_service.py
"""
Base class for locator-managed services
──────────────────────────────────────────────
Responsibilities:
    • Declare dependencies at class creation:
          class Mailer(BaseService, depends_on=(Smtp,)): ...
    • Register / unregister itself under `service_key`
    • Fill its own injection slots via the locator
──────────────────────────────────────────────
"""
from __future__ import annotations
from typing import Any, Callable, ClassVar, Hashable, Iterable, Optional

from service_kernel.di.context import get_locator
from service_kernel.di.declarations import DeclarationTable, declarations
from service_kernel.di.locator import ServiceLocator


class BaseService:
    """
    Base class for all services.

    Provides:
      - class-level dependency declarations (depends_on=..., table=...)
      - self-registration under `service_key` (defaults to the class)
      - dependency injection for annotated slots
    """

    service_key: ClassVar[Optional[Hashable]] = None

    def __init_subclass__(
        cls,
        depends_on: Iterable[Hashable] = (),
        table: Optional[DeclarationTable] = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        (table if table is not None else declarations).declare(cls, *depends_on)

    def __init__(self, locator: Optional[ServiceLocator] = None):
        self._locator = locator

    @property
    def locator(self) -> ServiceLocator:
        # Resolve lazily so services built at import time follow set_locator()
        return self._locator or get_locator()

    @classmethod
    def key(cls) -> Hashable:
        return cls.service_key if cls.service_key is not None else cls

    # ──────────────────────────────────────────────
    # Locator helpers
    # ──────────────────────────────────────────────
    def register(self) -> bool:
        """Register on the locator; False when refused or parked."""
        return self.locator.register(self.key(), self)

    def unregister(self) -> bool:
        if self.locator.peek(self.key()) is not self:
            return False
        return self.locator.unregister(self.key())

    def inject_dependencies(self, on_unresolved: Optional[Callable[[], Any]] = None) -> bool:
        return self.locator.inject(self, on_unresolved)
