"""
Testing utilities for service-kernel apps.
──────────────────────────────────────────────────────────────
Provides pytest fixtures and helpers to run isolated locators.
──────────────────────────────────────────────────────────────
"""
from .fixtures import authoring_locator, declaration_table, global_locator, locator, make_locator

__all__ = ["authoring_locator", "declaration_table", "global_locator", "locator", "make_locator"]
