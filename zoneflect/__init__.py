"""
This module serves as the main entry point for the zoneflect package,
exposing its primary public API.
"""

from zoneflect._decorators import (
    DecoratorGenerator,
    context_of,
    decorated_class,
    get_class,
)
from zoneflect._utils import scan_directory, scan_file
from zoneflect.core import (
    DEFAULT_ZONE,
    Accessor,
    Class,
    ClassGraph,
    ClassRegistry,
    Collector,
    Method,
    Parameter,
    Property,
    ReflectMatrix,
    Reflector,
    ReflectorWrapper,
    Zone,
    default_registry,
)

# --- Define main API for zoneflect module ---
__all__ = [
    "DEFAULT_ZONE",
    "Accessor",
    "Class",
    "ClassGraph",
    "ClassRegistry",
    "Collector",
    "DecoratorGenerator",
    "Method",
    "Parameter",
    "Property",
    "ReflectMatrix",
    "Reflector",
    "ReflectorWrapper",
    "Zone",
    "context_of",
    "decorated_class",
    "default_registry",
    "get_class",
    "scan_directory",
    "scan_file",
]
