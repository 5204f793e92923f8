from typing import Annotated

import pandas as pd
import pytest

from zoneflect import ReflectMatrix, Zone
from zoneflect._errors import InvalidReflectorError


@pytest.fixture
def bunny(generator, registry):
    Motion = generator.method_decorator({"isMotion": True})
    Caption = generator.property_decorator({"pattern": "(*) mph"})

    @generator.class_decorator({"scope": "singleton"})
    class Bunny:
        speed: Annotated[int, Caption] = 7

        @Motion
        def run(self, speed, direction):
            pass

        def sleep(self):
            pass

        @property
        def color(self):
            return "white"

    return registry.get(Bunny)


@pytest.mark.classgraph
def test_reflect_matrix_rows_and_columns(bunny):
    matrix = ReflectMatrix(bunny).build()

    assert isinstance(matrix, pd.DataFrame)
    assert list(matrix.index) == ["run", "sleep", "color", "speed"]
    assert matrix.index.name == "member"
    assert list(matrix.columns) == ["kind", "decorated", "parameters", "isMotion", "pattern"]
    assert matrix["kind"].tolist() == ["method", "method", "accessor", "property"]
    assert matrix["decorated"].tolist() == [True, False, False, True]
    assert matrix.loc["run", "parameters"] == "speed, direction"
    assert matrix.loc["color", "parameters"] == ""
    assert matrix["isMotion"].tolist() == [True, None, None, None]
    assert matrix.loc["speed", "pattern"] == "(*) mph"


@pytest.mark.classgraph
def test_reflect_matrix_reads_one_zone(bunny):
    matrix = ReflectMatrix(bunny, Zone("other")).build()

    assert list(matrix.columns) == ["kind", "decorated", "parameters"]


@pytest.mark.classgraph
def test_reflect_matrix_context_keys_do_not_shadow_columns(generator, registry):
    class Bunny:
        @generator.method_decorator({"kind": "motion"})
        def run(self):
            pass

    matrix = ReflectMatrix(registry.get(Bunny)).build()

    assert matrix.loc["run", "kind"] == "method"
    assert matrix.loc["run", "context.kind"] == "motion"


@pytest.mark.classgraph
def test_reflect_matrix_empty_class(registry):
    class Empty:
        pass

    matrix = ReflectMatrix(registry.get(Empty)).build()

    assert matrix.empty
    assert list(matrix.columns) == ["kind", "decorated", "parameters"]


def test_reflect_matrix_rejects_other_reflectors(bunny):
    with pytest.raises(InvalidReflectorError, match="expected a Class reflector"):
        ReflectMatrix(bunny.get_method("run"))

    with pytest.raises(TypeError):
        ReflectMatrix({"run": {}})
