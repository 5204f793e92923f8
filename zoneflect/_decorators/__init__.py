"""
This module aggregates the decorator machinery from the sub-modules,
making it accessible under the 'zoneflect._decorators' namespace.
"""

from zoneflect._decorators.common import context_of, decorated_class, get_class
from zoneflect._decorators.generator import DecoratorGenerator

__all__ = [
    "DecoratorGenerator",
    "context_of",
    "decorated_class",
    "get_class",
]
