from __future__ import annotations

import pytest

from qbdoc.hooks import HookRegistry, load_hook
from qbdoc.models import Capability, Feature
from qbdoc.openapi import Operation, Parameter

FEATURE = Feature(Capability.FILTER, "filter")


def _call(registry: HookRegistry):
    return registry.run(Operation("GET", "/api/users"), Parameter("filter[name]"), FEATURE)


def test_hooks_run_in_registration_order() -> None:
    calls = []
    registry = HookRegistry()
    registry.register(lambda op, param, feature: calls.append("first"))
    registry.register(lambda op, param, feature: calls.append("second"))

    assert _call(registry) is False
    assert calls == ["first", "second"]
    assert len(registry) == 2


def test_first_halt_short_circuits() -> None:
    calls = []

    def veto(operation, parameter, feature):
        calls.append((operation.path, parameter.name, feature.capability))
        return "skip"

    registry = HookRegistry([veto])
    registry.register(lambda *args: calls.append("never"))

    assert _call(registry) == "skip"
    assert calls == [("/api/users", "filter[name]", Capability.FILTER)]


def test_register_works_as_a_decorator() -> None:
    registry = HookRegistry()

    @registry.register
    def hook(operation, parameter, feature):
        return False

    assert list(registry) == [hook]
    with pytest.raises(TypeError):
        registry.register("not callable")  # type: ignore[arg-type]


def test_load_hook_imports_by_path() -> None:
    assert load_hook("os.path:join") is __import__("os").path.join
    with pytest.raises(ValueError):
        load_hook("os.path")
    with pytest.raises(ValueError):
        load_hook("os.path:missing_attribute")
    with pytest.raises(TypeError):
        load_hook("os:sep")
