"""Enumerations used across the custom event package."""

from enum import Enum


class Signature(str, Enum):
    """Argument shape delivered to subscriber callbacks.

    - ``LIST``: ``callback(context, event_type, args, companion)``.
      Subscriber exceptions are caught and aggregated.
    - ``FLAT``: ``callback(context, *args)``.
      Subscriber exceptions propagate immediately out of ``fire()``.
    """

    LIST = "list"
    FLAT = "flat"

    @property
    def isolates_errors(self) -> bool:
        """True when subscriber failures are captured instead of raised."""
        return self is Signature.LIST


class OverrideKind(str, Enum):
    NONE = "none"
    COMPANION = "companion"  # Companion becomes the execution context
    EXPLICIT = "explicit"  # A supplied object becomes the execution context


class IdAllocatorKind(str, Enum):
    UUID = "uuid"
    COUNTER = "counter"
