"""
This module defines the ReflectMatrix class, which provides a tabular view of
a class reflector and the context its members carry in one zone. It serves as
an introspection tool for checking what a set of decorators actually stored.

The `ReflectMatrix` transforms a `Class` reflector into a pandas DataFrame:

- **Rows**: One per member reflector, in the order methods, accessors,
  properties. The index holds the member names.
- **Columns**: `kind` ("method", "accessor" or "property"), `decorated`
  (whether a decorator explicitly targeted the member), `parameters` (the
  comma separated parameter names of a method), then one column per context
  key found on any member under the zone.
- **Cells**: For context columns, the stored value or None if the member has
  no such key.

It is the underlying component for the `ClassGraph.build_matrix()` method.
"""

from typing import Any

import pandas as pd

from zoneflect._errors import _validate_class_reflector

from .reflector import Accessor, Class, Method, Reflector
from .zone import Zone

_BASE_COLUMNS = ("kind", "decorated", "parameters")


def _member_kind(member: Reflector) -> str:
    if isinstance(member, Method):
        return "method"
    if isinstance(member, Accessor):
        return "accessor"
    return "property"


class ReflectMatrix:
    """Matrix view for the members of a class reflector.

    Args:
        class_reflector (Class): The class reflector to tabulate.
        zone (Zone | None, optional): The zone whose context fills the context
            columns. Defaults to `Zone.DEFAULT`.

    Raises:
        InvalidReflectorError: If `class_reflector` is not a `Class` reflector.
    """

    def __init__(self, class_reflector: Class, zone: Zone | None = None):
        self._class = _validate_class_reflector(class_reflector)
        self._zone = zone if zone is not None else Zone.DEFAULT

    def _context_columns(self, members: list[Reflector]) -> list[Any]:
        # Keys in order of first appearance
        keys: dict[Any, None] = {}
        for member in members:
            keys.update(dict.fromkeys(member.get_context(self._zone) or {}))
        return list(keys)

    def build(self) -> pd.DataFrame:
        """Construct and return the reflect matrix as a pandas DataFrame."""
        members = list(self._class.members())
        context_keys = self._context_columns(members)

        data: dict[Any, list[Any]] = {
            "kind": [_member_kind(m) for m in members],
            "decorated": [m.is_decorated for m in members],
            "parameters": [
                ", ".join(p.name for p in m.parameters) if isinstance(m, Method) else ""
                for m in members
            ],
        }

        for key in context_keys:
            # Context keys never shadow the fixed columns
            column = f"context.{key}" if key in _BASE_COLUMNS else key
            data[column] = [m.get_context(self._zone, key) for m in members]

        index = pd.Index([m.name for m in members], name="member")
        return pd.DataFrame(data, index=index, columns=list(data))
