import pytest

from zoneflect import DEFAULT_ZONE, ReflectorWrapper, Zone, context_of


class CityInfo:
    def population(self):
        return 1_000_000


@pytest.fixture
def city(registry):
    return registry.get(CityInfo)


def test_wrapper_starts_empty(city):
    info = context_of(city, Zone("census"))

    assert info.context() is None
    assert info.get_context() == {}
    assert info.get("name") is None
    assert not info.has("name")


def test_wrapper_defaults_to_default_zone(city):
    info = context_of(city)

    info.set("name", "Cologne")

    assert info.zone is DEFAULT_ZONE
    assert info.reflector is city
    assert city.get_context(DEFAULT_ZONE, "name") == "Cologne"


def test_wrapper_set_update_and_get(city):
    census = Zone("census")
    info = ReflectorWrapper(city, census)

    info.set("name", "Cologne")
    info.update({"population": 1_084_831, "river": "Rhine"})
    info.update({"population": 1_087_353})

    assert info.get_context() == {
        "name": "Cologne",
        "population": 1_087_353,
        "river": "Rhine",
    }
    # Nothing leaks into other zones
    assert city.get_context(DEFAULT_ZONE) is None


def test_wrapper_defaults_and_conditional_set(city):
    info = context_of(city, Zone("census"))
    info.set("districts", 0)

    assert info.get_or_default("districts", 9) == 0
    assert info.get_or_default("area", 405.0) == 405.0

    # A falsy value counts as present
    assert not info.set_if_undefined("districts", 9)
    assert info.get("districts") == 0
    assert info.set_if_undefined("area", 405.0)
    assert info.get("area") == 405.0


def test_wrappers_share_the_reflector_state(city):
    census = Zone("census")
    first = context_of(city, census)
    second = context_of(city, census)

    first.set("mayor", "Reker")

    assert second.get("mayor") == "Reker"
    assert second.context() is first.context()
