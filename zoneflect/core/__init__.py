"""
This module exposes the core components of the zoneflect engine: zones, the
reflector hierarchy, the class registry with its integrator, and the
tabular and graph views of a class reflector.
"""

from zoneflect.core.collector import Collector
from zoneflect.core.integrator import DraftTable, Integrator
from zoneflect.core.markers import ParameterMarker, PropertyMarker
from zoneflect.core.reflector import (
    Accessor,
    Class,
    Method,
    Parameter,
    Property,
    Reflector,
)
from zoneflect.core.registry import ClassRegistry, default_registry
from zoneflect.core.wrapper import ReflectorWrapper
from zoneflect.core.zone import DEFAULT_ZONE, Zone
from zoneflect.core._matrix import ReflectMatrix
from zoneflect.core.nxgraph import ClassGraph

__all__ = [
    "DEFAULT_ZONE",
    "Accessor",
    "Class",
    "ClassGraph",
    "ClassRegistry",
    "Collector",
    "DraftTable",
    "Integrator",
    "Method",
    "Parameter",
    "ParameterMarker",
    "Property",
    "PropertyMarker",
    "ReflectMatrix",
    "Reflector",
    "ReflectorWrapper",
    "Zone",
    "default_registry",
]
