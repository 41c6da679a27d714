import logging

import pytest


class ServiceA:
    pass


class ServiceB:
    pass


class ServiceC:
    pass


class Hooked:
    def __init__(self, log):
        self.log = log

    def on_registered(self, locator):
        self.log.append(("on_registered", locator.has(Hooked)))


class Vetoing:
    def __init__(self, allow):
        self.allow = allow
        self.asked_with = None

    def can_be_registered(self, locator):
        self.asked_with = locator
        return self.allow


def test_register_without_dependencies_is_immediate(locator):
    a = ServiceA()
    assert locator.register(ServiceA, a)
    assert locator.has(ServiceA)
    assert locator.get(ServiceA) is a


def test_register_instance_uses_its_class_as_key(locator):
    a = ServiceA()
    assert locator.register_instance(a)
    assert locator.keys() == [ServiceA]


def test_duplicate_registration_keeps_first_and_logs(locator, caplog):
    first, second = ServiceA(), ServiceA()
    locator.register(ServiceA, first)

    with caplog.at_level(logging.ERROR, logger="service_kernel"):
        assert not locator.register(ServiceA, second)

    assert locator.get(ServiceA) is first
    assert "already registered" in caplog.text


def test_none_is_refused(locator):
    assert not locator.register(ServiceA, None)
    assert not locator.has(ServiceA)


@pytest.mark.parametrize("allow", [True, False])
def test_conditional_service_can_veto(locator, allow):
    svc = Vetoing(allow)
    assert locator.register(Vetoing, svc) is allow
    assert locator.has(Vetoing) is allow
    assert svc.asked_with is locator


def test_non_type_keys(locator):
    locator.register("config", {"debug": True})
    assert locator.get("config") == {"debug": True}


def test_deferred_promotion(locator, declaration_table):
    declaration_table.declare(ServiceB, ServiceA)
    b = ServiceB()

    assert not locator.register(ServiceB, b)
    assert not locator.has(ServiceB)
    assert locator.pending == [(ServiceB, b)]

    locator.register(ServiceA, ServiceA())

    assert locator.has(ServiceB)
    assert locator.get(ServiceB) is b
    assert locator.pending == []


def test_pending_registration_is_deduplicated(locator, declaration_table):
    declaration_table.declare(ServiceB, ServiceA)
    b = ServiceB()
    locator.register(ServiceB, b)
    locator.register(ServiceB, b)
    assert len(locator.pending) == 1


def test_pending_keeps_the_requested_key(locator, declaration_table):
    declaration_table.declare(ServiceB, ServiceA)
    b = ServiceB()
    locator.register("b-service", b)
    locator.register(ServiceA, ServiceA())

    assert locator.get("b-service") is b
    assert not locator.has(ServiceB)


def test_chained_dependencies_resolve_in_one_registration(locator, declaration_table):
    declaration_table.declare(ServiceB, ServiceA)
    declaration_table.declare(ServiceC, ServiceB)
    order = []

    class Rec:
        def on_service_registered(self, key):
            order.append(key)

        def on_service_unregistered(self, key):
            pass

    rec = Rec()
    for key in (ServiceA, ServiceB, ServiceC):
        locator.subscribe(key, rec)

    locator.register(ServiceC, ServiceC())
    locator.register(ServiceB, ServiceB())
    assert locator.keys() == []

    locator.register(ServiceA, ServiceA())

    assert locator.keys() == [ServiceA, ServiceB, ServiceC]
    # nested sweeps dispatch the innermost registration first
    assert order == [ServiceC, ServiceB, ServiceA]


def test_store_insert_happens_before_hooks_and_observers(locator):
    log = []

    class Obs:
        def on_service_registered(self, key):
            log.append(("observer", locator.has(key)))

        def on_service_unregistered(self, key):
            pass

    locator.subscribe(Hooked, Obs())
    locator.register(Hooked, Hooked(log))

    assert log == [("on_registered", True), ("observer", True)]


def test_pending_instances_observe_new_dependency_when_promoted(locator, declaration_table):
    declaration_table.declare(ServiceB, ServiceA)
    seen = []

    class NeedsA(ServiceB):
        def on_registered(self, loc):
            seen.append(loc.get(ServiceA))

    declaration_table.declare(NeedsA, ServiceA)
    locator.register(ServiceB, NeedsA())
    a = ServiceA()
    locator.register(ServiceA, a)

    assert seen == [a]


def test_observer_receives_one_event_per_successful_call(locator, recorder):
    locator.subscribe(ServiceA, recorder)

    locator.register(ServiceA, ServiceA())
    locator.register(ServiceA, ServiceA())  # refused
    locator.unregister(ServiceA)
    locator.unregister(ServiceA)  # no-op
    locator.register(ServiceA, ServiceA())

    assert recorder.events == [
        ("registered", ServiceA),
        ("unregistered", ServiceA),
        ("registered", ServiceA),
    ]


def test_register_from_inside_on_registered(locator, declaration_table):
    declaration_table.declare(ServiceC, ServiceB)

    class Spawner(ServiceA):
        def on_registered(self, loc):
            loc.register(ServiceB, ServiceB())

    locator.register(ServiceC, ServiceC())
    locator.register(ServiceA, Spawner())

    assert locator.keys() == [ServiceA, ServiceB, ServiceC]


def test_scenario_unregister_then_reregister(locator, declaration_table):
    declaration_table.declare(ServiceB, ServiceA)

    locator.register(ServiceA, ServiceA())
    assert locator.has(ServiceA)

    locator.unregister(ServiceA)
    locator.register(ServiceB, ServiceB())
    assert not locator.has(ServiceB)

    locator.register(ServiceA, ServiceA())
    assert locator.has(ServiceB)
