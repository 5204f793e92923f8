"""
This module provides the ready-made decorator and helper functions most
applications need besides their own generated decorators.

- `decorated_class`: A context-less class decorator on the default zone. It
  marks a class as decorated and integrates it immediately, which is handy
  when only its members carry decorators.
- `get_class`: Returns the class reflector of a class from a registry.
- `context_of`: Returns a `ReflectorWrapper` binding a reflector to a zone.
"""

from collections.abc import Callable

from zoneflect.core import (
    Class,
    ClassRegistry,
    Reflector,
    ReflectorWrapper,
    Zone,
    default_registry,
)

from .generator import DecoratorGenerator


def decorated_class(
    _cls: type | None = None,
    *,
    registry: ClassRegistry | None = None,
) -> type | Callable[[type], type]:
    """
    A general class decorator.

    Can be used with or without parentheses (`@decorated_class` or
    `@decorated_class()`).

    Args:
        _cls (type | None, optional): The class to be decorated. This argument
            is automatically populated when `@decorated_class` is used without
            parentheses. Defaults to None.
        registry (ClassRegistry | None, optional): The registry to integrate
            the class into. Defaults to the process-wide registry.

    Returns:
        type | Callable: The decorated class, or the decorator itself.

    Example:
        ```python
        @decorated_class
        class Bunny:
            @Motion()
            def run(self): ...
        ```
    """
    decorator = DecoratorGenerator(registry=registry).class_decorator()

    if _cls is None:
        # Return the decorator itself for Python to apply.
        return decorator
    else:
        # The class is passed directly as _cls. Apply the decorator now.
        return decorator(_cls)


def get_class(constructor: type, registry: ClassRegistry | None = None) -> Class | None:
    """Return the class reflector of `constructor`, integrating it if needed."""
    registry = registry if registry is not None else default_registry
    return registry.get(constructor)


def context_of(reflector: Reflector, zone: Zone | None = None) -> ReflectorWrapper:
    """Return a wrapper binding `reflector` to `zone` (default zone if omitted)."""
    return ReflectorWrapper(reflector, zone if zone is not None else Zone.DEFAULT)
