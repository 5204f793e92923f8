from concurrent.futures import ThreadPoolExecutor
from typing import Annotated

import pytest

from zoneflect import ClassRegistry, default_registry, get_class
from zoneflect._errors import InvalidTargetError


def test_get_returns_one_reflector_per_class(registry):
    class Bunny:
        pass

    bunny = registry.get(Bunny)

    assert registry.get(Bunny) is bunny
    assert registry.lookup(Bunny) is bunny
    assert Bunny in registry
    assert len(registry) == 1
    assert list(registry) == [bunny]


def test_lookup_does_not_integrate(registry):
    class Bunny:
        pass

    assert registry.lookup(Bunny) is None
    assert not registry.is_integrated(Bunny)
    assert Bunny not in registry


def test_get_rejects_non_classes(registry):
    with pytest.raises(InvalidTargetError):
        registry.get("Bunny")

    with pytest.raises(TypeError, match="class reflector cannot be created"):
        registry.integrate(42)


def test_registries_are_independent():
    class Bunny:
        pass

    first, second = ClassRegistry(), ClassRegistry()

    assert first.get(Bunny) is not second.get(Bunny)


def test_get_class_uses_default_registry():
    class Bunny:
        pass

    assert get_class(Bunny) is default_registry.get(Bunny)


def test_integrate_runs_once(registry):
    class Bunny:
        pass

    first = registry.integrate(Bunny)
    second = registry.integrate(Bunny, decorated=True)

    assert first is second
    # The second call is a no-op, so the flag is unchanged
    assert not first.is_decorated


def test_concurrent_first_lookups_share_a_reflector(registry):
    class Bunny:
        def run(self):
            pass

    with ThreadPoolExecutor(max_workers=8) as executor:
        reflectors = list(executor.map(lambda _: registry.get(Bunny), range(32)))

    assert all(reflector is reflectors[0] for reflector in reflectors)
    assert len(registry) == 1


def test_failed_integration_is_rolled_back(generator, registry):
    state = {"fail": True}

    def check(wrapper, owner, name):
        if state["fail"]:
            raise RuntimeError("not ready")

    class Bunny:
        age: Annotated[int, generator.property_decorator(callback=check)] = 0

    with pytest.raises(RuntimeError, match="not ready"):
        registry.get(Bunny)

    assert Bunny not in registry
    assert not registry.is_integrated(Bunny)

    state["fail"] = False
    bunny = registry.get(Bunny)

    assert bunny.get_property("age") is not None
    assert registry.is_integrated(Bunny)


def test_retry_after_failed_integration_keeps_decorations(generator, registry):
    state = {"fail": True}

    def check(wrapper, owner, name):
        if state["fail"]:
            raise RuntimeError("not ready")

    class Bunny:
        age: Annotated[int, generator.property_decorator(callback=check)] = 0

        @generator.method_decorator({"isMotion": True})
        def run(self):
            pass

        @generator.accessor_decorator({"readable": True})
        @property
        def color(self):
            return "white"

    with pytest.raises(RuntimeError, match="not ready"):
        registry.get(Bunny)

    # The drafts taken by the failed attempt are back in the table
    assert len(registry.drafts) == 2

    state["fail"] = False
    bunny = registry.get(Bunny)

    assert bunny.get_method("run").is_decorated
    assert bunny.get_method("run").get_context(generator.zone, "isMotion") is True
    assert bunny.get_accessor("color").get_context(generator.zone) == {"readable": True}
    assert len(registry.drafts) == 0
