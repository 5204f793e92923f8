"""
This module defines the reflector hierarchy, the object model zoneflect builds
for every reflected declaration.

`Reflector`:
The shared base. It holds the declaration's name, whether a decorator
literally targeted it (`is_decorated`) and a per-zone context dictionary.
Context set under one zone is invisible under any other zone. Setting a
mapping shallow-merges it into the zone's existing context instead of
replacing it.

The five variants add what identifies their declaration:
- `Class`: the class object (the registry key) and the name -> reflector maps
  of its methods, accessors and properties.
- `Method`: the underlying function, its kind (instance, class or static) and
  its ordered `Parameter` reflectors.
- `Accessor`: the getter, setter and deleter of a property.
- `Property`, `Parameter`: only the base state.

Lookups never raise for absence: a missing member, parameter, zone or key
yields None.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Generic, Protocol

from .collector import Collector
from .zone import Zone

# Marks an omitted argument where None is a legitimate value
_MISSING = object()

# Bases that only carry typing machinery and never count as a parent
_TERMINAL_BASES = (object, Generic, Protocol)


class Reflector:
    """Base class of all reflectors.

    Args:
        name (str): The name of the reflected declaration.
        is_decorated (bool): Whether at least one decorator targeted the
            declaration. Fixed for the lifetime of the reflector.
    """

    def __init__(self, name: str, is_decorated: bool = True):
        self._name = name
        self._is_decorated = bool(is_decorated)
        self._context_map: dict[Zone, dict[str, Any]] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, decorated={self._is_decorated})"

    @property
    def name(self) -> str:
        """The name of the reflected declaration."""
        return self._name

    @property
    def is_decorated(self) -> bool:
        """Whether a decorator explicitly targeted the declaration."""
        return self._is_decorated

    def get_context(self, zone: Zone, key: Any = _MISSING) -> Any:
        """
        Return the context stored under `zone`, or one value of it.

        Args:
            zone (Zone): The zone to read from.
            key (Any, optional): A key within the zone's context. If omitted,
                the whole context dictionary is returned.

        Returns:
            Any: The context dictionary, the value at `key`, or None if the
                zone or key is not set.
        """
        context = self._context_map.get(zone)
        if key is _MISSING:
            return context
        if context is None:
            return None
        return context.get(key)

    def set_context(self, zone: Zone, context_or_key: Any, value: Any = _MISSING) -> None:
        """
        Store context under `zone`.

        Called with a mapping, the mapping is shallow-merged into the zone's
        context (a copy is stored if the zone has none yet). Called with a
        key and a value, that single field is set.

        Raises:
            TypeError: If a mapping is combined with a value, or a key is
                given without a value.
        """
        current = self._context_map.get(zone)

        if isinstance(context_or_key, Mapping):
            if value is not _MISSING:
                raise TypeError("A value cannot be combined with a context mapping.")
            if current is None:
                self._context_map[zone] = dict(context_or_key)
            else:
                current.update(context_or_key)
            return

        if value is _MISSING:
            raise TypeError(f"No value given for context key {context_or_key!r}.")

        if current is None:
            self._context_map[zone] = {context_or_key: value}
        else:
            current[context_or_key] = value

    def has_context(self, zone: Zone, key: Any = _MISSING) -> bool:
        """Check whether `zone` has context, or whether it holds `key`."""
        context = self._context_map.get(zone)
        if context is None:
            return False
        return key is _MISSING or key in context

    def zones(self) -> tuple[Zone, ...]:
        """Return the zones holding context on this reflector."""
        return tuple(self._context_map)

    def _rename(self, name: str) -> None:
        """Adopt the attribute name a draft was finally bound under."""
        self._name = name


class Class(Reflector):
    """Reflector of a class.

    Instances are created by integration and published to a `ClassRegistry`;
    user code obtains them through `registry.get(cls)` or `get_class(cls)`.

    Note:
        Plain class attributes and instance fields are not visible on the
        class namespace the way methods and accessors are, so only
        properties declared with a property marker are reflected.
    """

    def __init__(
        self,
        constructor: type,
        methods: dict[str, "Method"],
        accessors: dict[str, "Accessor"],
        properties: dict[str, "Property"],
        *,
        is_decorated: bool = False,
        registry: Any,
    ):
        super().__init__(constructor.__name__, is_decorated)
        self._constructor = constructor
        self._methods = methods
        self._accessors = accessors
        self._properties = properties
        self._registry = registry

    @property
    def constructor(self) -> type:
        """The reflected class, used as the registry key."""
        return self._constructor

    @property
    def methods(self) -> Mapping[str, "Method"]:
        """Read-only map of method name to method reflector."""
        return MappingProxyType(self._methods)

    @property
    def accessors(self) -> Mapping[str, "Accessor"]:
        """Read-only map of accessor name to accessor reflector."""
        return MappingProxyType(self._accessors)

    @property
    def properties(self) -> Mapping[str, "Property"]:
        """Read-only map of property name to property reflector."""
        return MappingProxyType(self._properties)

    def get_method(self, name: str) -> "Method | None":
        return self._methods.get(name)

    def get_accessor(self, name: str) -> "Accessor | None":
        return self._accessors.get(name)

    def get_property(self, name: str) -> "Property | None":
        return self._properties.get(name)

    def members(self) -> Collector:
        """Return every member reflector: methods, accessors, then properties."""
        return Collector(
            [*self._methods.values(), *self._accessors.values(), *self._properties.values()]
        )

    def decorated_methods(self) -> Collector:
        return Collector(self._methods.values()).collect(lambda m: m.is_decorated)

    def decorated_accessors(self) -> Collector:
        return Collector(self._accessors.values()).collect(lambda a: a.is_decorated)

    def decorated_properties(self) -> Collector:
        return Collector(self._properties.values()).collect(lambda p: p.is_decorated)

    def get_parent(self) -> "Class | None":
        """
        Return the reflector of the parent class, integrating it if needed.

        Only the first declared base is followed, skipping `object`,
        `typing.Generic` and `typing.Protocol`. A class with no other base
        has no parent. Context is never inherited implicitly:
        callers walk up with `get_parent()` when they want ancestor context.
        """
        parent = next(
            (base for base in self._constructor.__bases__ if base not in _TERMINAL_BASES),
            None,
        )
        if parent is None:
            return None

        return self._registry.get(parent)


class Method(Reflector):
    """Reflector of a method.

    Args:
        name (str): The method name.
        is_decorated (bool): Whether a method decorator targeted it.
        function (Callable): The underlying function (unwrapped from
            `staticmethod` / `classmethod`).
        parameters (list[Parameter]): Parameter reflectors in declaration
            order, without the implicit receiver.
        kind (str): "instance", "class" or "static".
    """

    def __init__(
        self,
        name: str,
        is_decorated: bool,
        function: Callable,
        parameters: list["Parameter"],
        kind: str = "instance",
    ):
        super().__init__(name, is_decorated)
        self._function = function
        self._parameters = list(parameters)
        self._kind = kind

    @property
    def function(self) -> Callable:
        return self._function

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def parameters(self) -> list["Parameter"]:
        """Parameter reflectors in declaration order (a copy)."""
        return list(self._parameters)

    def get_parameter(self, index: int) -> "Parameter | None":
        """Return the parameter reflector at `index`, or None if out of range."""
        if 0 <= index < len(self._parameters):
            return self._parameters[index]
        return None

    def get_parameter_by_name(self, name: str) -> "Parameter | None":
        for parameter in self._parameters:
            if parameter.name == name:
                return parameter
        return None

    def _rebind(self, kind: str, parameters: list["Parameter"]) -> None:
        """Replace kind and parameter list once integration knows the real kind."""
        self._kind = kind
        self._parameters = list(parameters)


class Accessor(Reflector):
    """Reflector of a property (getter / setter / deleter)."""

    def __init__(
        self,
        name: str,
        is_decorated: bool,
        getter: Callable | None = None,
        setter: Callable | None = None,
        deleter: Callable | None = None,
    ):
        super().__init__(name, is_decorated)
        self._getter = getter
        self._setter = setter
        self._deleter = deleter

    @property
    def getter(self) -> Callable | None:
        return self._getter

    @property
    def setter(self) -> Callable | None:
        return self._setter

    @property
    def deleter(self) -> Callable | None:
        return self._deleter

    def _bind(
        self,
        getter: Callable | None,
        setter: Callable | None,
        deleter: Callable | None,
    ) -> None:
        """Fill the slots still empty with the functions of the final property."""
        self._getter = self._getter or getter
        self._setter = self._setter or setter
        self._deleter = self._deleter or deleter


class Property(Reflector):
    """Reflector of a class-level field declared with a property marker."""


class Parameter(Reflector):
    """Reflector of a method parameter."""
