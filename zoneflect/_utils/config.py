"""
This module manages global configuration settings for the zoneflect package.

It offers a simple, centralized mechanism for setting and retrieving
package-level options that affect how classes are integrated and how source
trees are scanned. Options can be set one by one with
`set_zoneflect_option` or in bulk from a JSON, YAML or TOML file with
`load_zoneflect_options`.

Available options:
- `scan_extensions`: File suffixes `scan_directory` loads (default `[".py"]`).
- `scan_include` / `scan_exclude`: Substring patterns on file names used to
  filter scanned files (default `None`).
- `include_dunder_methods`: Whether integration reflects dunder methods such
  as `__repr__` (default `False`).
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .parsers import _ConfigReader

logger = logging.getLogger(__name__)

# A private dictionary to hold all package settings.
_settings = {
    "scan_extensions": [".py"],
    "scan_include": None,
    "scan_exclude": None,
    "include_dunder_methods": False,
}

# Expected value type per option; pattern options also accept None
_option_types = {
    "scan_extensions": (list, tuple),
    "scan_include": (list, tuple, str, type(None)),
    "scan_exclude": (list, tuple, str, type(None)),
    "include_dunder_methods": (bool,),
}


def _validate_option(option: str, value: Any) -> Any:
    """Check an option key and value and return the normalized value."""
    if not isinstance(option, str):
        raise TypeError("Key must be a string.")

    if option not in _settings:
        raise KeyError(
            f"Invalid option key: {option!r}. Valid options are: {list(_settings.keys())}"
        )

    if not isinstance(value, _option_types[option]):
        raise TypeError(
            f"Invalid value for option {option!r}: {type(value).__name__!r}."
        )

    if option == "scan_extensions":
        if not all(isinstance(ext, str) for ext in value):
            raise TypeError("Option 'scan_extensions' must contain strings only.")
        # Normalize to lower-case suffixes with a leading dot
        return [f".{ext.lstrip('*').lstrip('.').lower()}" for ext in value]

    if isinstance(value, tuple):
        return list(value)

    return value


def set_zoneflect_option(options: str | Iterable[str], values: Any) -> None:
    """
    Set one or more configuration options for the zoneflect package.

    Args:
        options (str | Iterable[str]): The name(s) of the option(s) to set
            (e.g., 'scan_extensions').
        values (Any): The value to set for a single option, or an iterable of
            values matching `options` position by position.

    Raises:
        KeyError: If an option name is unknown.
        TypeError: If a value has the wrong type for its option.
        ValueError: If `options` and `values` differ in length.
    """
    if isinstance(options, str):
        options = [options]
        values = [values]

    if not isinstance(options, Iterable):
        raise TypeError("Key must be a string or an iterable of strings.")

    if not isinstance(values, Iterable):
        raise TypeError("Values must be an iterable when several options are set.")

    validated = {
        option: _validate_option(option, value)
        for option, value in zip(options, values, strict=True)
    }
    _settings.update(validated)
    logger.debug("Options set: %r", validated)


def load_zoneflect_options(path: str | Path) -> dict[str, Any]:
    """
    Load options from a JSON, YAML or TOML file and apply them.

    Args:
        path (str | Path): The configuration file. Its top level must be a
            mapping of option names to values.

    Returns:
        dict[str, Any]: The options that were applied.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be decoded or does not hold a mapping.
        KeyError: If the file names an unknown option.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Specified config file not found: {config_path}")

    data = _ConfigReader(config_path).read()
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping of options.")

    # Validate everything before applying anything
    validated = {option: _validate_option(option, value) for option, value in data.items()}
    _settings.update(validated)
    logger.info("Loaded %d zoneflect option(s) from %s", len(validated), config_path)

    return validated


def _get_option(key: str) -> Any:
    """
    Get a configuration option for the zoneflect package.

    Args:
        key (str): The name of the option to get.
    """
    return _settings.get(key)
