from zoneflect import DEFAULT_ZONE, Zone


def test_zones_compare_by_identity():
    first = Zone("storage")
    second = Zone("storage")

    assert first == first
    assert first != second
    assert len({first, second}) == 2


def test_zone_label_and_repr():
    assert Zone("storage").label == "storage"
    assert Zone().label == ""
    assert repr(Zone("storage")) == "Zone('storage')"


def test_default_zone_is_shared():
    assert DEFAULT_ZONE is Zone.DEFAULT
    assert DEFAULT_ZONE.label == "DEFAULT"
