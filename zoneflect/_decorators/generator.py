"""
This module implements the `DecoratorGenerator`, the factory behind every
zoneflect decorator.

A generator is bound to one `Zone` (and one `ClassRegistry`). Each of its five
methods takes an optional context mapping and an optional callback and
returns something usable at one attachment site:

- `class_decorator`: `@decorator` on a class statement. Triggers integration,
  so all member drafts collected while the class body ran are reconciled.
- `method_decorator`: `@decorator` on a function, `staticmethod` or
  `classmethod` in a class body.
- `accessor_decorator`: `@decorator` on a `property` (or on its raw getter or
  setter function).
- `property_decorator`: a marker for `Annotated[...]` class annotations.
- `parameter_decorator`: a marker for `Annotated[...]` parameter annotations.

Generated decorators return their target unchanged. Context is merged into
the reflector's zone before the callback runs; the callback receives a
`ReflectorWrapper` followed by the decorator arguments.

Example:
    ```python
    from typing import Annotated
    import zoneflect as zf

    generator = zf.DecoratorGenerator()


    def Scope(scope: str):
        return generator.class_decorator({"scope": scope})


    def Caption(pattern: str):
        return generator.property_decorator({"pattern": pattern})


    @Scope("singleton")
    class Bunny:
        moving_speed: Annotated[int, Caption("(*) miles per hour")] = 0


    bunny = zf.get_class(Bunny)
    bunny.get_context(zf.DEFAULT_ZONE, "scope")  # 'singleton'
    ```
"""

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from zoneflect._errors import InvalidTargetError, ReflectorMissingError
from zoneflect._utils import _as_accessor, _as_method
from zoneflect.core import (
    Accessor,
    ClassRegistry,
    Method,
    ParameterMarker,
    PropertyMarker,
    Zone,
    default_registry,
)
from zoneflect.core.integrator import _build_parameters
from zoneflect.core.markers import _apply_decoration


def _accessor_functions(target: Any) -> tuple[Callable | None, ...] | None:
    """Return `(getter, setter, deleter)` for a property or a raw accessor function."""
    functions = _as_accessor(target)
    if functions is not None:
        return functions
    if inspect.isfunction(target):
        # Getter or setter decorated below @property / @x.setter;
        # integration binds the final functions
        return target, None, None
    return None


class DecoratorGenerator:
    """Produces decorators that store context in one zone.

    Args:
        zone (Zone | None, optional): The zone the generated decorators write
            to. Defaults to `Zone.DEFAULT`.
        registry (ClassRegistry | None, optional): The registry holding drafts
            and class reflectors. Defaults to the process-wide registry.
    """

    def __init__(self, zone: Zone | None = None, registry: ClassRegistry | None = None):
        self._zone = zone if zone is not None else Zone.DEFAULT
        self._registry = registry if registry is not None else default_registry

    @property
    def zone(self) -> Zone:
        return self._zone

    @property
    def registry(self) -> ClassRegistry:
        return self._registry

    def class_decorator(
        self,
        context: Mapping[str, Any] | None = None,
        callback: Callable | None = None,
    ) -> Callable[[type], type]:
        """Generate a class decorator.

        The callback is called as `callback(wrapper, cls)`.
        """

        def decorator(cls: type) -> type:
            if not inspect.isclass(cls):
                raise InvalidTargetError("class", cls)

            self._registry.integrate(cls, decorated=True)
            class_reflector = self._registry.lookup(cls)
            if class_reflector is None:
                raise ReflectorMissingError(cls)

            _apply_decoration(class_reflector, self._zone, context, callback, (cls,))
            return cls

        return decorator

    def method_decorator(
        self,
        context: Mapping[str, Any] | None = None,
        callback: Callable | None = None,
    ) -> Callable:
        """Generate a method decorator.

        The callback is called as `callback(wrapper, target, name)`, where
        `target` is the decorated object as received.

        Raises:
            InvalidTargetError: If the target is not a function, `staticmethod`
                or `classmethod`, or is a module-level function.
        """

        def decorator(target: Any) -> Any:
            function, kind = _as_method(target)
            if function is None:
                raise InvalidTargetError("method", target)
            if "." not in function.__qualname__:
                # No class body or enclosing function: it can never be integrated
                raise InvalidTargetError(
                    "method", target, "module-level functions are not methods."
                )

            def create() -> Method:
                parameters = _build_parameters(function, kind)
                return Method(function.__name__, True, function, parameters, kind)

            method = self._registry.drafts.find_or_add("method", [function], create)
            _apply_decoration(
                method, self._zone, context, callback, (target, function.__name__)
            )
            return target

        return decorator

    def accessor_decorator(
        self,
        context: Mapping[str, Any] | None = None,
        callback: Callable | None = None,
    ) -> Callable:
        """Generate an accessor decorator.

        The callback is called as `callback(wrapper, target, name)`.
        """

        def decorator(target: Any) -> Any:
            functions = _accessor_functions(target)
            if functions is None or not any(functions):
                raise InvalidTargetError("accessor", target)

            getter, setter, deleter = functions
            name = next(f for f in functions if f is not None).__name__

            def create() -> Accessor:
                if inspect.isfunction(target):
                    return Accessor(name, True)
                return Accessor(name, True, getter, setter, deleter)

            accessor = self._registry.drafts.find_or_add("accessor", functions, create)
            if not inspect.isfunction(target):
                accessor._bind(getter, setter, deleter)
            _apply_decoration(accessor, self._zone, context, callback, (target, name))
            return target

        return decorator

    def property_decorator(
        self,
        context: Mapping[str, Any] | None = None,
        callback: Callable | None = None,
    ) -> PropertyMarker:
        """Generate a property marker for `Annotated[...]` class annotations.

        The callback is called as `callback(wrapper, owner_cls, name)` when
        the owner class is integrated.
        """
        return PropertyMarker(self._zone, context, callback)

    def parameter_decorator(
        self,
        context: Mapping[str, Any] | None = None,
        callback: Callable | None = None,
    ) -> ParameterMarker:
        """Generate a parameter marker for `Annotated[...]` parameter annotations.

        The callback is called as `callback(wrapper, function, method_name,
        index)` when the method's parameter list is built.
        """
        return ParameterMarker(self._zone, context, callback)
