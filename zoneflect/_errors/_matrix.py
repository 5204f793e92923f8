"""
This module defines custom exceptions related to the tabular and graph views
of a class reflector (`ReflectMatrix` and `ClassGraph`).

`InvalidReflectorError`:
This `TypeError` is raised when a view is built from something other than a
class reflector. The views read the member maps and the parent chain, which
only `Class` reflectors have, so the misuse is caught early with a
descriptive message.
"""

from typing import Any


class InvalidReflectorError(TypeError):
    """Raised when a class view receives an object that is not a Class reflector."""

    def __init__(self, detail: str):
        super().__init__(f"Invalid reflector for class view: {detail}")


def _validate_class_reflector(class_reflector: Any) -> Any:
    """Validate that `class_reflector` is a `Class` reflector and return it.

    Raises:
        InvalidReflectorError: If the object is not a `Class` reflector.
    """
    # Explicit import to avoid circular import error
    from zoneflect.core.reflector import Class

    if not isinstance(class_reflector, Class):
        raise InvalidReflectorError(
            f"expected a Class reflector, got {type(class_reflector).__name__!r}"
        )
    return class_reflector
