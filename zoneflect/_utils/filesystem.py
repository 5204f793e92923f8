"""
This module provides the filesystem helpers behind `scan_directory`.

- `_iter_source_files` walks a directory tree in a stable, sorted order and
  yields the files whose suffix is one of the requested extensions.
- `_handle_files_from_iterable` keeps or drops paths based on substring
  patterns matched against the file name, which is how the `include` and
  `exclude` arguments (and the `scan_include` / `scan_exclude` options)
  are applied.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path


def _iter_source_files(directory: Path, extensions: Iterable[str]) -> Iterator[Path]:
    """Yield files below `directory` whose suffix is in `extensions`, recursively."""
    suffixes = {ext.lower() for ext in extensions}

    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            # Skip interpreter caches and hidden directories
            if entry.name == "__pycache__" or entry.name.startswith("."):
                continue
            yield from _iter_source_files(entry, suffixes)
        elif entry.suffix.lower() in suffixes:
            yield entry


def _handle_files_from_iterable(
    iterable: Iterable[str | Path],
    contain_matching: Iterable[str] | str | None = None,
    include: bool = True,
) -> list:
    """Includes or excludes elements from an iterable based on string matching."""

    if not contain_matching:
        return list(iterable)

    if isinstance(contain_matching, str):
        contain_matching = [contain_matching]

    if not isinstance(contain_matching, Iterable):
        raise TypeError("Argument 'contain_matching' must be a string or an iterable.")

    return [
        item
        for item in iterable
        # - If include=True, it keeps items where a match is found.
        # - If include=False, it keeps items where no match is found.
        if include is any(pattern in Path(item).name for pattern in contain_matching)
    ]
