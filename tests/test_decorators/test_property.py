from typing import Annotated

import pytest

from zoneflect import DEFAULT_ZONE


@pytest.mark.smoke
def test_property_marker_caption(generator, registry):
    def Caption(pattern: str):
        return generator.property_decorator({"pattern": pattern})

    class Bunny:
        moving_speed: Annotated[int, Caption("(*) miles per hour")] = 7
        name: str = "bun"

    bunny = registry.get(Bunny)
    prop = bunny.get_property("moving_speed")

    assert prop.is_decorated
    pattern = prop.get_context(DEFAULT_ZONE, "pattern")
    assert pattern.replace("(*)", str(Bunny().moving_speed)) == "7 miles per hour"
    # Fields without a marker are not reflected
    assert bunny.get_property("name") is None
    assert list(bunny.properties) == ["moving_speed"]


def test_stacked_property_markers_apply_left_to_right(generator, registry):
    """Tax is added before Tips, in reading order."""
    calls = []

    def add_rate(wrapper, owner, name):
        calls.append((owner, name))
        rates = wrapper.get_or_default("rates", [])
        wrapper.set("rates", [*rates, wrapper.get("rate")])

    def Tax(rate: float):
        return generator.property_decorator({"rate": rate}, add_rate)

    def Tips(rate: float):
        return generator.property_decorator({"rate": rate}, add_rate)

    class Receipt:
        total: Annotated[float, Tax(0.07), Tips(0.15)] = 100.0

    prop = registry.get(Receipt).get_property("total")
    rates = prop.get_context(DEFAULT_ZONE, "rates")

    assert rates == [0.07, 0.15]
    assert calls == [(Receipt, "total"), (Receipt, "total")]
    assert Receipt.total * (1 + sum(rates)) == pytest.approx(122.0)


def test_property_markers_apply_at_integration(generator, registry):
    calls = []
    Tracked = generator.property_decorator(callback=lambda w, owner, name: calls.append(name))

    class Bunny:
        age: Annotated[int, Tracked]

    assert calls == []

    registry.get(Bunny)
    registry.get(Bunny)

    assert calls == ["age"]


def test_property_callback_can_reach_the_class(generator, registry):
    found = []

    def lookup(wrapper, owner, name):
        found.append(registry.get(owner))

    class Bunny:
        age: Annotated[int, generator.property_decorator(callback=lookup)] = 1

    bunny = registry.get(Bunny)

    assert found == [bunny]


def test_decorated_properties_collector(generator, registry):
    Column = generator.property_decorator({"column": True})

    class Bunny:
        name: Annotated[str, Column] = ""
        age: Annotated[int, Column] = 0

    bunny = registry.get(Bunny)

    assert [p.name for p in bunny.decorated_properties()] == ["name", "age"]
    assert [m.name for m in bunny.members()] == ["name", "age"]
