"""
This module defines the `Zone`, the scoping token that partitions the context
stored on every reflector.

Two unrelated decorator libraries may both want to store a key called
"name" on the same method. By binding each `DecoratorGenerator` to its own
zone, their contexts live side by side on the reflector without colliding.
Zones compare by identity only: two zones created with the same label are
still distinct.
"""


class Zone:
    """An opaque token scoping context storage on reflectors."""

    __slots__ = ("_label",)

    def __init__(self, label: str | None = None):
        self._label = label or ""

    @property
    def label(self) -> str:
        """The human-readable label of this zone."""
        return self._label

    def __repr__(self) -> str:
        return f"Zone({self._label!r})"


# Zone used whenever a caller does not pass one
Zone.DEFAULT = Zone("DEFAULT")
DEFAULT_ZONE = Zone.DEFAULT
