"""
This module provides the `ReflectorWrapper`, a thin read/write view binding one
reflector to one zone. Decorator callbacks receive a wrapper as their first
argument, and `context_of` hands one out to application code, so neither has
to repeat the zone on every call.
"""

from typing import Any

from .reflector import Reflector
from .zone import Zone


class ReflectorWrapper:
    """A zone-bound view over a reflector's context.

    The wrapper keeps no state besides the (reflector, zone) pair; every
    read and write goes straight to the reflector.
    """

    def __init__(self, reflector: Reflector, zone: Zone = Zone.DEFAULT):
        self._reflector = reflector
        self._zone = zone

    def __repr__(self) -> str:
        return f"ReflectorWrapper({self._reflector!r}, {self._zone!r})"

    @property
    def reflector(self) -> Reflector:
        return self._reflector

    @property
    def zone(self) -> Zone:
        return self._zone

    def context(self) -> dict[str, Any] | None:
        """Return the zone's context, or None if nothing is set."""
        return self._reflector.get_context(self._zone)

    def get_context(self) -> dict[str, Any]:
        """Return the zone's context, or an empty dict if nothing is set."""
        context = self._reflector.get_context(self._zone)
        return context if context is not None else {}

    def get(self, key: Any) -> Any:
        return self._reflector.get_context(self._zone, key)

    def set(self, key: Any, value: Any) -> None:
        self._reflector.set_context(self._zone, key, value)

    def update(self, context: dict[str, Any]) -> None:
        """Shallow-merge `context` into the zone's context."""
        self._reflector.set_context(self._zone, context)

    def has(self, key: Any) -> bool:
        return self._reflector.has_context(self._zone, key)

    def get_or_default(self, key: Any, default: Any) -> Any:
        """Return the value at `key`, or `default` if the key is absent."""
        if self.has(key):
            return self.get(key)
        return default

    def set_if_undefined(self, key: Any, value: Any) -> bool:
        """
        Set `key` only if it is absent. A falsy value counts as present.

        Returns:
            bool: True if the value was set.
        """
        if self.has(key):
            return False
        self.set(key, value)
        return True
