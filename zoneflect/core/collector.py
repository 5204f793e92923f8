"""
This module provides the `Collector`, a small insertion-ordered container
without duplicates. Class reflectors hand out collectors when callers ask for
a filtered view of their members, e.g. only the decorated methods.
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any


class Collector:
    """An insertion-ordered collection of unique elements.

    Elements must be hashable. Adding an element that is already present
    keeps its original position.
    """

    def __init__(self, elements: Iterable[Any] | None = None):
        # dict keys keep insertion order and uniqueness
        self._elements = dict.fromkeys(elements or ())

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element: Any) -> bool:
        return element in self._elements

    def __repr__(self) -> str:
        return f"Collector({list(self._elements)!r})"

    def add(self, element: Any) -> "Collector":
        """Add an element and return this collector."""
        self._elements.setdefault(element, None)
        return self

    def delete(self, element: Any) -> "Collector":
        """Remove an element if present and return this collector."""
        self._elements.pop(element, None)
        return self

    def collect(self, predicate: Callable[[Any], bool]) -> "Collector":
        """Return a new collector with the elements satisfying `predicate`."""
        return Collector(element for element in self._elements if predicate(element))

    def find(self, predicate: Callable[[Any], bool]) -> Any | None:
        """Return the first element satisfying `predicate`, or None."""
        for element in self._elements:
            if predicate(element):
                return element
        return None

    def for_each(self, callback: Callable[[Any], Any]) -> "Collector":
        """Call `callback` on every element and return this collector."""
        for element in self._elements:
            callback(element)
        return self
