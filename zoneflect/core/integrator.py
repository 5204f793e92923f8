"""
This module contains the class integration algorithm, the heart of zoneflect.

Member decorators run while the class body executes, before the class object
exists. They cannot reach the class, so they leave a *draft* reflector in the
`DraftTable`, keyed by the function they decorated. When the class decorator
fires, or when the registry is first asked for the class, the `Integrator`
reconciles two sources of truth:

1. **Drafts**: reflectors created by method and accessor decorators, already
   marked as decorated and possibly carrying context.
2. **Namespace scan**: every entry of `vars(cls)`, classified as a method
   (function, `staticmethod`, `classmethod`) or an accessor (`property`,
   `functools.cached_property`).

A scanned member reuses the draft registered for its function (following
`__wrapped__` chains). Drafts whose name equals the member name are claimed
first; a draft still unclaimed afterwards is adopted, once, by a member
bound to its function under another name. Getter, setter and deleter drafts
of one property are merged. Members without a draft get a reflector with
`is_decorated=False`.

Properties come only from property markers in the class annotations; fields
without a marker are invisible to reflection.

Integration runs once per class. A second call returns the reflector that
was published the first time without scanning again.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from zoneflect._utils import (
    _as_accessor,
    _as_method,
    _get_bound_parameters,
    _get_markers,
    _get_option,
    _is_dunder,
    _unwrap_chain,
)

from .markers import ParameterMarker, PropertyMarker
from .reflector import Accessor, Class, Method, Parameter, Property, Reflector

logger = logging.getLogger(__name__)

# Constructors are not reflected as methods
_CONSTRUCTOR_NAMES = frozenset({"__init__", "__new__"})


def _build_parameters(
    function: Callable,
    kind: str,
    existing: Iterable[Parameter] | None = None,
) -> list[Parameter]:
    """
    Build the parameter reflectors of a method in declaration order.

    Parameters whose name matches one of `existing` reuse that reflector.
    New parameters carrying parameter markers are created decorated and the
    markers are applied to them in order.

    Args:
        function (Callable): The underlying function of the method.
        kind (str): "instance", "class" or "static"; decides whether the
            first parameter is the implicit receiver.
        existing (Iterable[Parameter] | None, optional): Reflectors to reuse
            by name.
    """
    reuse = {parameter.name: parameter for parameter in existing or ()}
    parameters = []

    for index, param in enumerate(_get_bound_parameters(function, kind)):
        parameter = reuse.get(param.name)
        if parameter is None:
            markers = _get_markers(param.annotation, ParameterMarker)
            parameter = Parameter(param.name, bool(markers))
            for marker in markers:
                marker.apply(parameter, function, function.__name__, index)
        parameters.append(parameter)

    return parameters


def _has_parameter_markers(function: Callable, kind: str) -> bool:
    return any(
        _get_markers(param.annotation, ParameterMarker)
        for param in _get_bound_parameters(function, kind)
    )


class DraftTable:
    """Pending member reflectors created before their class exists.

    Drafts are grouped by kind ("method", "accessor") and keyed by the
    function(s) their decorator received. An accessor draft is reachable from
    each of its getter, setter and deleter.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._drafts: dict[str, dict[Callable, Reflector]] = {
            "method": {},
            "accessor": {},
        }

    def __len__(self) -> int:
        """Number of distinct drafts still waiting for integration."""
        with self._lock:
            return sum(
                len({id(draft) for draft in drafts.values()})
                for drafts in self._drafts.values()
            )

    def find(self, kind: str, keys: Iterable[Callable]) -> Reflector | None:
        """Return the draft registered under any of `keys`, or None."""
        with self._lock:
            for key in keys:
                draft = self._drafts[kind].get(key)
                if draft is not None:
                    return draft
        return None

    def find_or_add(
        self,
        kind: str,
        keys: Iterable[Callable],
        factory: Callable[[], Reflector],
    ) -> Reflector:
        """
        Return the draft registered under any of `keys`, creating it if absent.

        The lookup and the creation happen in one critical section; the new
        draft is registered under every key.
        """
        keys = [key for key in keys if key is not None]
        with self._lock:
            draft = self.find(kind, keys)
            if draft is None:
                draft = factory()
            for key in keys:
                self._drafts[kind][key] = draft
            return draft

    def take(
        self,
        kind: str,
        keys: Iterable[Callable],
        name: str | None = None,
        taken: list | None = None,
    ) -> Reflector | None:
        """
        Remove and return the draft of a scanned member.

        Each key is searched together with the functions it wraps. If `name`
        is given, only a draft of that name matches. Removed entries are
        appended to `taken` so that `restore` can put them back.
        """
        with self._lock:
            for key in keys:
                for candidate in _unwrap_chain(key):
                    draft = self._drafts[kind].get(candidate)
                    if draft is not None and (name is None or draft.name == name):
                        self._remove(kind, draft, taken)
                        return draft
        return None

    def take_all(
        self,
        kind: str,
        keys: Iterable[Callable],
        taken: list | None = None,
    ) -> list[Reflector]:
        """Remove and return every distinct draft reachable from `keys`, in key order."""
        found: list[Reflector] = []
        with self._lock:
            for key in keys:
                for candidate in _unwrap_chain(key):
                    draft = self._drafts[kind].get(candidate)
                    if draft is not None and all(draft is not f for f in found):
                        found.append(draft)
            for draft in found:
                self._remove(kind, draft, taken)
        return found

    def restore(self, taken: Iterable[tuple]) -> None:
        """Re-register the `(kind, key, draft)` entries removed by `take`."""
        with self._lock:
            for kind, key, draft in taken:
                self._drafts[kind][key] = draft

    def _remove(self, kind: str, draft: Reflector, taken: list | None) -> None:
        drafts = self._drafts[kind]
        for key in [k for k, v in drafts.items() if v is draft]:
            del drafts[key]
            if taken is not None:
                taken.append((kind, key, draft))


class Integrator:
    """Builds the member maps of a class exactly once and publishes them.

    Args:
        registry (ClassRegistry): The registry receiving the class reflectors
            and owning the draft table.
    """

    def __init__(self, registry: Any):
        self._registry = registry
        self._integrated: set[type] = set()

    def is_integrated(self, constructor: type) -> bool:
        return constructor in self._integrated

    def integrate(self, constructor: type, *, decorated: bool = False) -> Class | None:
        """
        Integrate `constructor` and return its class reflector.

        If loading fails, every draft taken so far is put back into the
        draft table, so a later attempt sees the same decorations.

        Args:
            constructor (type): The class to integrate.
            decorated (bool, optional): Whether a class decorator triggered
                the integration. Defaults to False.

        Returns:
            Class | None: The published reflector. For an already integrated
                class this is whatever the registry holds for it.
        """
        if constructor in self._integrated:
            return self._registry.lookup(constructor)

        taken: list[tuple] = []
        # Mark first so that callbacks looking the class up do not recurse
        self._integrated.add(constructor)
        try:
            methods = self._load_methods(constructor, taken)
            accessors = self._load_accessors(constructor, taken)
            properties: dict[str, Property] = {}

            class_reflector = Class(
                constructor,
                methods,
                accessors,
                properties,
                is_decorated=decorated,
                registry=self._registry,
            )
            self._registry.register(class_reflector)

            # Property callbacks may look the class up, so load them last
            self._load_properties(constructor, properties)
        except BaseException:
            self._integrated.discard(constructor)
            self._registry._discard(constructor)
            self._registry.drafts.restore(taken)
            raise

        logger.debug(
            "Integrated %s: %d method(s), %d accessor(s), %d property(ies)",
            constructor.__qualname__,
            len(methods),
            len(accessors),
            len(properties),
        )

        return class_reflector

    def _load_methods(self, constructor: type, taken: list) -> dict[str, Method]:
        """Reconcile method drafts with the methods found in the class namespace."""
        include_dunder = _get_option("include_dunder_methods")
        drafts = self._registry.drafts
        scanned = []

        for name, value in vars(constructor).items():
            function, kind = _as_method(value)
            if function is None:
                continue
            if name in _CONSTRUCTOR_NAMES:
                if drafts.take("method", [function], taken=taken) is not None:
                    logger.debug(
                        "Ignoring method decorator on constructor %s.%s",
                        constructor.__qualname__,
                        name,
                    )
                continue
            scanned.append((name, function, kind))

        # Drafts named like their member are claimed before any renaming
        claimed = {
            name: drafts.take("method", [function], name, taken)
            for name, function, _ in scanned
        }

        methods: dict[str, Method] = {}
        for name, function, kind in scanned:
            method = claimed[name]
            if method is None:
                # Bound under another attribute name; a draft is adopted once
                method = drafts.take("method", [function], taken=taken)
                if method is not None:
                    method._rename(name)

            if method is None:
                if _is_dunder(name) and not include_dunder:
                    continue
                parameters = (
                    _build_parameters(function, kind)
                    if _has_parameter_markers(function, kind)
                    else []
                )
                method = Method(name, False, function, parameters, kind)
            elif method.kind != kind:
                # e.g. @staticmethod applied on top of the method decorator
                method._rebind(kind, _build_parameters(method.function, kind, method.parameters))

            methods[name] = method

        return methods

    def _load_accessors(self, constructor: type, taken: list) -> dict[str, Accessor]:
        """
        Reconcile accessor drafts with the properties found in the class namespace.

        Getter, setter and deleter may each carry their own draft. They are
        merged into the first one found (getter first), later context winning
        on equal keys.
        """
        drafts = self._registry.drafts
        accessors: dict[str, Accessor] = {}

        for name, value in vars(constructor).items():
            functions = _as_accessor(value)
            if functions is None:
                continue

            getter, setter, deleter = functions
            keys = [f for f in functions if f is not None]
            found = drafts.take_all("accessor", keys, taken)
            if not found:
                accessor = Accessor(name, False, getter, setter, deleter)
            else:
                accessor, *others = found
                for other in others:
                    for zone in other.zones():
                        accessor.set_context(zone, other.get_context(zone))
                accessor._rename(name)
                accessor._bind(getter, setter, deleter)

            accessors[name] = accessor

        return accessors

    def _load_properties(self, constructor: type, properties: dict[str, Property]) -> None:
        """Create a property reflector for every annotation carrying property markers."""
        for name, annotation in inspect.get_annotations(constructor).items():
            markers = _get_markers(annotation, PropertyMarker)
            if not markers:
                continue

            prop = Property(name, True)
            properties[name] = prop
            for marker in markers:
                marker.apply(prop, constructor, name)
