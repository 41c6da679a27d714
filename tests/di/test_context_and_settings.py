import logging

from service_kernel.config.base_settings import ExecutionContext, LocatorSettings
from service_kernel.config.logging import LOGGER_NAME, configure_logging
from service_kernel.di import context
from service_kernel.di.context import get_locator, reset_locator, set_locator
from service_kernel.di.declarations import declarations
from service_kernel.di.locator import ServiceLocator


class Service:
    pass


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("SERVICE_KERNEL_EXECUTION_CONTEXT", raising=False)
    settings = LocatorSettings(_env_file=None)
    assert settings.execution_context is ExecutionContext.LIVE
    assert settings.is_live
    assert settings.clear_completions_on_reset is False


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SERVICE_KERNEL_EXECUTION_CONTEXT", "authoring")
    monkeypatch.setenv("SERVICE_KERNEL_CLEAR_COMPLETIONS_ON_RESET", "true")
    settings = LocatorSettings(_env_file=None)
    assert settings.execution_context is ExecutionContext.AUTHORING
    assert settings.clear_completions_on_reset is True


def test_locator_defaults_to_global_declarations():
    assert ServiceLocator(LocatorSettings(_env_file=None)).declarations is declarations


def test_global_locator_is_created_lazily_and_reset():
    reset_locator()
    first = get_locator()
    assert get_locator() is first

    first.register(Service, Service())
    reset_locator()

    assert not first.has(Service)
    assert context._locator is None
    assert get_locator() is not first
    reset_locator()


def test_set_locator_overrides(global_locator):
    assert get_locator() is global_locator
    replacement = ServiceLocator(LocatorSettings(_env_file=None))
    set_locator(replacement)
    assert get_locator() is replacement


def test_configure_logging_is_idempotent():
    settings = LocatorSettings(_env_file=None, log_level="debug")
    log = configure_logging(settings)
    configure_logging(settings)

    own = [h for h in log.handlers if getattr(h, "_service_kernel", False)]
    assert log.name == LOGGER_NAME
    assert len(own) == 1
    assert log.level == logging.DEBUG

    configure_logging(LocatorSettings(_env_file=None, log_level="nonsense"))
    assert log.level == logging.INFO
