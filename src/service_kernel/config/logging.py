# service_kernel/config/logging.py
from __future__ import annotations
import logging
from typing import Optional

from service_kernel.config.base_settings import LocatorSettings

__all__ = ["LOGGER_NAME", "configure_logging"]

LOGGER_NAME = "service_kernel"
_FORMAT = "%(levelname)s: [%(name)-24s] %(message)s"


def configure_logging(settings: Optional[LocatorSettings] = None) -> logging.Logger:
    """
    Attach one console handler to the package logger.

    Safe to call repeatedly: the handler is installed once and only the
    level is refreshed on later calls.
    """
    settings = settings or LocatorSettings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level)

    handler = next((h for h in log.handlers if getattr(h, "_service_kernel", False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._service_kernel = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(_FORMAT))
        log.addHandler(handler)
    handler.setLevel(level)
    return log
