"""
This module provides the introspection utilities that let zoneflect understand
the classes and functions it reflects. By using Python's `inspect` and
`typing` modules, these helpers analyze signatures, annotations and class
namespaces at decoration and integration time.

Key Functions:
- `_get_parameter_names`: Returns the declared parameter names of a callable
  in order, names only. Type information is never inspected.
- `_get_bound_parameters`: Same, but as `inspect.Parameter` objects and
  without the implicit receiver (`self` / `cls`) of instance and class
  methods.
- `_get_markers`: Pulls zoneflect markers out of `typing.Annotated` metadata,
  which is how property and parameter decorators are attached.
- `_as_method` / `_as_accessor`: Classify a value found in a class namespace
  the way integration needs it.
"""

import functools
import inspect
import logging
from collections.abc import Callable, Iterator
from typing import Annotated, Any, get_args, get_origin

logger = logging.getLogger(__name__)

# Parameter kinds that can receive the implicit receiver
_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _get_function_parameters(f: Callable) -> list[inspect.Parameter]:
    """Return the declared parameters of `f`, or an empty list without a signature."""
    try:
        sig = inspect.signature(f)
    except (TypeError, ValueError):
        # Some builtins expose no signature; they have no parameters to reflect
        logger.debug("No signature available for %r", f)
        return []

    return list(sig.parameters.values())


def _get_parameter_names(f: Callable) -> list[str]:
    """
    Identifies the declared parameter names of a function, in order.

    Args:
        f (Callable): The function to inspect.

    Returns:
        list[str]: Parameter names including any receiver parameter.
    """
    return [param.name for param in _get_function_parameters(f)]


def _get_bound_parameters(f: Callable, kind: str) -> list[inspect.Parameter]:
    """
    Return the parameters of a method as seen by its callers.

    Instance and class methods drop their first positional parameter, which
    receives the instance or class. Static methods keep every parameter.

    Args:
        f (Callable): The underlying function of the method.
        kind (str): One of "instance", "class" or "static".
    """
    params = _get_function_parameters(f)
    if kind != "static" and params and params[0].kind in _POSITIONAL:
        return params[1:]
    return params


def _get_markers(annotation: Any, marker_type: type) -> list:
    """Return the instances of `marker_type` in an `Annotated[...]` annotation."""
    if get_origin(annotation) is not Annotated:
        return []

    # First argument is the annotated type itself
    return [meta for meta in get_args(annotation)[1:] if isinstance(meta, marker_type)]


def _unwrap_chain(f: Callable) -> Iterator[Callable]:
    """Yield `f` and every function it wraps through `__wrapped__`."""
    seen = set()
    while f is not None and id(f) not in seen:
        seen.add(id(f))
        yield f
        f = getattr(f, "__wrapped__", None)


def _as_method(value: Any) -> tuple[Callable | None, str | None]:
    """
    Classify a class namespace value as a method.

    Returns:
        tuple: `(function, kind)` where kind is "instance", "class" or
            "static", or `(None, None)` if the value is not a method.
    """
    if isinstance(value, staticmethod):
        return value.__func__, "static"
    if isinstance(value, classmethod):
        return value.__func__, "class"
    if inspect.isfunction(value):
        return value, "instance"
    return None, None


def _as_accessor(value: Any) -> tuple[Callable | None, Callable | None, Callable | None] | None:
    """
    Classify a class namespace value as an accessor.

    Returns:
        tuple | None: `(getter, setter, deleter)` for properties and cached
            properties, otherwise None.
    """
    if isinstance(value, property):
        return value.fget, value.fset, value.fdel
    if isinstance(value, functools.cached_property):
        return value.func, None, None
    return None


def _is_dunder(name: str) -> bool:
    """Check whether `name` is a special (double underscore) name."""
    return len(name) > 4 and name.startswith("__") and name.endswith("__")
