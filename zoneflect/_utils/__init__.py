"""
This module exposes utility functions from sub-modules for use
within the zoneflect package.
"""

from zoneflect._utils.config import (
    _get_option,
    load_zoneflect_options,
    set_zoneflect_option,
)
from zoneflect._utils.filesystem import _handle_files_from_iterable, _iter_source_files
from zoneflect._utils.inspect import (
    _as_accessor,
    _as_method,
    _get_bound_parameters,
    _get_markers,
    _is_dunder,
    _unwrap_chain,
)
from zoneflect._utils.loaders import scan_directory, scan_file
from zoneflect._utils.parsers import _ConfigReader

# Define main API for internal _utils module
# only contains methods/objects used within the package
__all__ = [
    "_ConfigReader",
    "_as_accessor",
    "_as_method",
    "_get_bound_parameters",
    "_get_markers",
    "_get_option",
    "_handle_files_from_iterable",
    "_is_dunder",
    "_iter_source_files",
    "_unwrap_chain",
    "load_zoneflect_options",
    "scan_directory",
    "scan_file",
    "set_zoneflect_option",
]
