"""Subscription records and context-override policy."""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from custom_event.core.enums import OverrideKind

# Marker for "argument not supplied" where None is a legitimate value.
UNSET: Any = object()


@dataclass(frozen=True)
class ContextOverride:
    """Which object a subscriber runs against.

    - ``NONE``: the event's default context.
    - ``COMPANION``: the subscriber's companion object.
    - ``EXPLICIT``: ``context``.
    """

    kind: OverrideKind = OverrideKind.NONE
    context: Any = None

    @classmethod
    def none(cls) -> ContextOverride:
        return NO_OVERRIDE

    @classmethod
    def use_companion(cls) -> ContextOverride:
        return cls(OverrideKind.COMPANION)

    @classmethod
    def explicit(cls, context: Any) -> ContextOverride:
        return cls(OverrideKind.EXPLICIT, context)

    @classmethod
    def coerce(cls, value: Any) -> ContextOverride:
        """Accept a ``ContextOverride`` or the bool/object shorthand.

        Any falsy value (``None``, ``False``, ``0``, ``""``) means no
        override, ``True`` means the companion becomes the context, and any
        other object is used as the context.
        """
        if isinstance(value, ContextOverride):
            return value
        if not value:
            return NO_OVERRIDE
        if value is True:
            return cls.use_companion()
        return cls.explicit(value)

    def __str__(self) -> str:
        if self.kind == OverrideKind.EXPLICIT:
            return f"explicit({self.context!r})"
        return self.kind.value


NO_OVERRIDE = ContextOverride()


def bind_companion(fn: Callable[..., Any], companion: Any) -> Callable[..., Any]:
    """Wrap *fn* so that *companion* is appended to every call."""

    @functools.wraps(fn)
    def bound(*args: Any) -> Any:
        return fn(*args, companion)

    return bound


class Subscription:
    """A registered callback plus its companion data and context policy.

    ``callback`` is what gets invoked; ``original_callback`` is the
    function exactly as the subscriber handed it over, so that
    ``unsubscribe(fn)`` still matches after ``callback`` was wrapped.
    """

    def __init__(
        self,
        sub_id: str,
        callback: Callable[..., Any],
        companion: Any = None,
        override: ContextOverride = NO_OVERRIDE,
        original_callback: Callable[..., Any] | None = None,
    ) -> None:
        self.id = sub_id
        self.callback: Callable[..., Any] | None = callback
        self.original_callback: Callable[..., Any] | None = (
            original_callback if original_callback is not None else callback
        )
        self.companion = companion
        self.override = override
        self.deleted = False

    def get_scope(self, default_scope: Any) -> Any:
        """Return the execution context, honouring the override policy."""
        if self.override.kind == OverrideKind.COMPANION:
            return self.companion
        if self.override.kind == OverrideKind.EXPLICIT:
            return self.override.context
        return default_scope

    def contains(self, fn: Callable[..., Any], companion: Any = UNSET) -> bool:
        """True if *fn* (and *companion*, when given) match this subscription."""
        if self.deleted:
            return False
        if not (self.callback == fn or self.original_callback == fn):
            return False
        if companion is UNSET:
            return True
        return self.companion is companion or self.companion == companion

    def tombstone(self) -> bool:
        """Clear the callback references.  Returns False if already cleared."""
        if self.deleted:
            return False
        self.callback = None
        self.original_callback = None
        self.companion = None
        self.deleted = True
        return True

    def __repr__(self) -> str:
        return (
            f"Subscription(id={self.id!r}, companion={self.companion!r}, "
            f"override={self.override})"
        )
