"""
This module defines how a decorator's payload lands on a reflector.

Every generated decorator does the same two things once it has found or
created its reflector: merge the caller's context into the reflector's
zone, then call the caller's callback with a `ReflectorWrapper` followed by
the decorator arguments. `_apply_decoration` does exactly that.

Python has no decorator syntax for fields or parameters, so those two kinds
are attached as markers inside `typing.Annotated`:

```python
class Receipt:
    total: Annotated[float, Tax(0.07), Tips(0.15)] = 0.0

    def pay(self, amount: Annotated[float, Currency("EUR")]): ...
```

A marker stays inert until integration (properties) or the building of the
method's parameter list (parameters) applies it to its reflector.
"""

from collections.abc import Callable, Mapping
from typing import Any

from .reflector import Reflector
from .wrapper import ReflectorWrapper
from .zone import Zone


def _apply_decoration(
    reflector: Reflector,
    zone: Zone,
    context: Mapping[str, Any] | None,
    callback: Callable | None,
    args: tuple,
) -> None:
    """Merge `context` into `reflector` under `zone`, then run `callback`."""
    if context is not None:
        reflector.set_context(zone, context)
    if callback is not None:
        callback(ReflectorWrapper(reflector, zone), *args)


class _Marker:
    """Zone-bound decorator payload waiting to be applied to a reflector."""

    def __init__(
        self,
        zone: Zone,
        context: Mapping[str, Any] | None = None,
        callback: Callable | None = None,
    ):
        self.zone = zone
        self.context = dict(context) if context is not None else None
        self.callback = callback

    def __repr__(self) -> str:
        return f"{type(self).__name__}(zone={self.zone!r}, context={self.context!r})"

    def apply(self, reflector: Reflector, *args: Any) -> None:
        _apply_decoration(reflector, self.zone, self.context, self.callback, args)


class PropertyMarker(_Marker):
    """Property decorator; applied with `(owner_cls, name)` at integration."""


class ParameterMarker(_Marker):
    """Parameter decorator; applied with `(function, method_name, index)`."""
