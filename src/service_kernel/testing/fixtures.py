"""
──────────────────────────────────────────────────────────────────────────────
service_kernel.testing.fixtures
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Provide reusable pytest fixtures for locator-based applications.

Exports:
    - declaration_table  → per-test DeclarationTable layered on the global one
    - locator            → fresh LIVE ServiceLocator, torn down after the test
    - authoring_locator  → fresh AUTHORING ServiceLocator
    - global_locator     → locator installed as the process-wide one
    - make_locator()     → build a locator with settings overrides

Usage in your test (conftest.py):
    pytest_plugins = ["service_kernel.testing.fixtures"]

    def test_register(locator):
        assert locator.register_instance(Mailer())
──────────────────────────────────────────────────────────────────────────────
"""

from typing import Any, Optional

import pytest

from service_kernel.config.base_settings import ExecutionContext, LocatorSettings
from service_kernel.di.context import reset_locator, set_locator
from service_kernel.di.declarations import DeclarationTable, declarations
from service_kernel.di.fallback import ServiceFallback
from service_kernel.di.locator import ServiceLocator


# ──────────────────────────────────────────────────────────────
# Utility: make_locator
# ──────────────────────────────────────────────────────────────
def make_locator(
    declarations: Optional[DeclarationTable] = None,
    fallback: Optional[ServiceFallback] = None,
    **overrides: Any,
) -> ServiceLocator:
    """
    Build a locator with explicit settings, ignoring the environment
    and any .env file.
    """
    settings = LocatorSettings(_env_file=None, **overrides)
    return ServiceLocator(settings, declarations=declarations, fallback=fallback)


# ──────────────────────────────────────────────────────────────
# DeclarationTable Fixture (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def declaration_table():
    """Per-test table; sees global declarations, writes never leak into them."""
    table = DeclarationTable(parent=declarations)
    yield table
    table.clear()


# ──────────────────────────────────────────────────────────────
# ServiceLocator Fixtures (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def locator(declaration_table):
    loc = make_locator(declaration_table, execution_context=ExecutionContext.LIVE)
    yield loc
    loc.unregister_all()


@pytest.fixture()
def authoring_locator(declaration_table):
    loc = make_locator(declaration_table, execution_context=ExecutionContext.AUTHORING)
    yield loc
    loc.unregister_all()


@pytest.fixture()
def global_locator():
    """Install a fresh locator as the process-wide one; reset afterwards."""
    loc = make_locator()
    set_locator(loc)
    yield loc
    reset_locator()
