"""
This module contains the logic for loading Python source files so that their
top-level decorators run. Reflection only sees a class after the module that
declares it has been executed; these helpers make that step explicit for
code that is not imported through the usual package machinery (plugin
folders, controller directories, ...).

- `scan_file` executes a single source file as a module. Each resolved path
  is executed at most once; later calls return the cached module.
- `scan_directory` walks a directory recursively, keeps files by extension
  and by include/exclude name patterns, and scans each of them in sorted
  order.
"""

import hashlib
import importlib.machinery
import importlib.util
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from .config import _get_option
from .filesystem import _handle_files_from_iterable, _iter_source_files

logger = logging.getLogger(__name__)

# Resolved path -> module already executed by `scan_file`
_scanned_modules: dict[Path, ModuleType] = {}


def _module_name_for(path: Path) -> str:
    """Build a unique, importable module name for a scanned file."""
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    stem = "".join(c if c.isalnum() else "_" for c in path.stem)
    return f"_zoneflect_scanned_{stem}_{digest}"


def scan_file(path: str | Path) -> ModuleType:
    """
    Execute a Python source file so that its decorators run.

    Args:
        path (str | Path): The file to load.

    Returns:
        ModuleType: The executed module.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the path is a directory or cannot be loaded as a module.
    """
    file_path = Path(path).resolve()
    if not file_path.exists():
        raise FileNotFoundError(f"Specified file not found: {file_path}")
    if file_path.is_dir():
        raise ValueError(f"Expected a file, got a directory: {file_path}")

    if file_path in _scanned_modules:
        return _scanned_modules[file_path]

    module_name = _module_name_for(file_path)
    # Explicit source loader so files with any configured suffix can be executed
    loader = importlib.machinery.SourceFileLoader(module_name, str(file_path))
    spec = importlib.util.spec_from_file_location(module_name, file_path, loader=loader)
    if spec is None or spec.loader is None:
        raise ValueError(f"Cannot load {file_path} as a Python module.")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise

    _scanned_modules[file_path] = module
    logger.info("Scanned %s", file_path)

    return module


def scan_directory(
    path: str | Path,
    extensions: Iterable[str] | None = None,
    include: Iterable[str] | str | None = None,
    exclude: Iterable[str] | str | None = None,
) -> list[ModuleType]:
    """
    Scan every matching source file below a directory, recursively.

    Args:
        path (str | Path): The directory to walk.
        extensions (Iterable[str] | None, optional): File suffixes to load.
            Defaults to the `scan_extensions` option.
        include (Iterable[str] | str | None, optional): Only files whose names
            contain one of these strings are loaded. Defaults to the
            `scan_include` option.
        exclude (Iterable[str] | str | None, optional): Files whose names
            contain one of these strings are skipped. Defaults to the
            `scan_exclude` option.

    Returns:
        list[ModuleType]: The scanned modules in load order.

    Raises:
        FileNotFoundError: If the directory does not exist.
        ValueError: If both `include` and `exclude` are given, or the path is
            not a directory.
    """
    dir_path = Path(path)
    if not dir_path.exists():
        raise FileNotFoundError(f"Specified path not found: {dir_path}")
    if not dir_path.is_dir():
        raise ValueError(f"Expected a directory, got a file: {dir_path}")

    extensions = extensions if extensions is not None else _get_option("scan_extensions")
    include = include if include is not None else _get_option("scan_include")
    exclude = exclude if exclude is not None else _get_option("scan_exclude")

    # It does not make sense to specify both include and exclude
    if include and exclude:
        raise ValueError("Cannot specify both 'exclude' and 'include'.")

    extensions = [f".{ext.lstrip('*').lstrip('.')}" for ext in extensions]
    files = list(_iter_source_files(dir_path, extensions))
    files = _handle_files_from_iterable(
        files,
        include or exclude,
        include=bool(include),
    )
    logger.debug("Scanning %d file(s) in %s", len(files), dir_path)

    return [scan_file(file) for file in files]
