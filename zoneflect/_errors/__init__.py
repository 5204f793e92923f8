"""
This module centralizes custom exception types for the zoneflect package,
making them easily importable from a single location.
"""

from ._matrix import InvalidReflectorError, _validate_class_reflector
from ._registry import InvalidTargetError, ReflectorMissingError

__all__ = [
    "InvalidReflectorError",
    "InvalidTargetError",
    "ReflectorMissingError",
    "_validate_class_reflector",
]
