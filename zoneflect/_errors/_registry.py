"""
This module defines the exceptions raised by the class registry and the
generated decorators.

`InvalidTargetError`:
This `TypeError` is raised when a generated decorator is applied to an object
of the wrong kind (e.g. a method decorator on a class) or when the registry
is asked to reflect something that is not a class. It names the decorator
kind and the offending object so the misuse is easy to locate.

`ReflectorMissingError`:
This `AssertionError` signals a broken internal contract: a class reflector
that should have been published by integration cannot be found. It is never
caught by zoneflect itself.
"""


class InvalidTargetError(TypeError):
    """Raised when a decorator or the registry receives an unsupported target."""

    def __init__(self, kind: str, target: object, reason: str | None = None):
        target_type = type(target).__name__
        target_name = getattr(target, "__name__", repr(target))
        message = (
            f"A {kind} reflector cannot be created for {target_name!r}."
            f"\n  - Received: an object of type '{target_type}'."
        )
        if reason:
            message += f"\n  - Reason: {reason}"
        super().__init__(message)


class ReflectorMissingError(AssertionError):
    """Raised when a class reflector is missing right after integration."""

    def __init__(self, constructor: type):
        name = getattr(constructor, "__qualname__", repr(constructor))
        super().__init__(f"Unexpected error: class reflector for {name!r} does not exist.")
