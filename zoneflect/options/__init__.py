"""
This module provides a convenient entry point for setting global
configuration options for the zoneflect package.
"""

from zoneflect._utils import load_zoneflect_options, set_zoneflect_option

__all__ = ["load_zoneflect_options", "set_zoneflect_option"]
