"""
This module implements the `ClassRegistry`, the store mapping each class to its
`Class` reflector.

The registry is an explicit context object: it owns the class map, the draft
table member decorators write into and the `Integrator` that reconciles
them. `default_registry` is the process-wide instance used whenever a caller
does not pass a registry of its own; tests and isolated plugin systems can
create separate registries.

Exactly one reflector exists per class and registry. `get` either returns it
or integrates the class on the spot. The lookup-or-integrate step runs under
a re-entrant lock, so concurrent first lookups of the same class still
produce a single reflector.
"""

import logging
import threading
from collections.abc import Iterator
from inspect import isclass

from zoneflect._errors import InvalidTargetError

from .integrator import DraftTable, Integrator
from .reflector import Class

logger = logging.getLogger(__name__)


class ClassRegistry:
    """Maps classes to their class reflectors and integrates them lazily."""

    def __init__(self):
        self._lock = threading.RLock()
        self._class_map: dict[type, Class] = {}
        self.drafts = DraftTable()
        self._integrator = Integrator(self)

    def __contains__(self, constructor: type) -> bool:
        return constructor in self._class_map

    def __len__(self) -> int:
        return len(self._class_map)

    def __iter__(self) -> Iterator[Class]:
        return iter(list(self._class_map.values()))

    def get(self, constructor: type) -> Class | None:
        """
        Return the reflector of `constructor`, integrating the class if needed.

        Repeated calls for the same class return the identical object.

        Raises:
            InvalidTargetError: If `constructor` is not a class.
        """
        if not isclass(constructor):
            raise InvalidTargetError("class", constructor)

        with self._lock:
            class_reflector = self._class_map.get(constructor)
            if class_reflector is None:
                class_reflector = self._integrator.integrate(constructor)
            return class_reflector

    def lookup(self, constructor: type) -> Class | None:
        """Return the registered reflector of `constructor` without integrating."""
        return self._class_map.get(constructor)

    def register(self, class_reflector: Class) -> None:
        """Insert or overwrite the entry keyed by the reflector's class."""
        with self._lock:
            self._class_map[class_reflector.constructor] = class_reflector
        logger.debug("Registered class reflector %r", class_reflector)

    def integrate(self, constructor: type, *, decorated: bool = False) -> Class | None:
        """Integrate `constructor` once; later calls are no-ops."""
        if not isclass(constructor):
            raise InvalidTargetError("class", constructor)

        with self._lock:
            return self._integrator.integrate(constructor, decorated=decorated)

    def is_integrated(self, constructor: type) -> bool:
        return self._integrator.is_integrated(constructor)

    def _discard(self, constructor: type) -> None:
        """Drop a half-built entry after a failed integration."""
        with self._lock:
            self._class_map.pop(constructor, None)


default_registry = ClassRegistry()
