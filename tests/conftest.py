import sys

import pytest

from service_kernel.testing.fixtures import (  # noqa: F401
    authoring_locator,
    declaration_table,
    global_locator,
    locator,
)


def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")


class Recorder:
    """Observer that records (event, key) tuples in call order."""

    def __init__(self):
        self.events = []

    def on_service_registered(self, key):
        self.events.append(("registered", key))

    def on_service_unregistered(self, key):
        self.events.append(("unregistered", key))


@pytest.fixture()
def recorder():
    return Recorder()
