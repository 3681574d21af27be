"""Detach handle returned by ``CustomEvent.subscribe()``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .subscription import Subscription

if TYPE_CHECKING:
    from .custom_event import CustomEvent


class EventHandle:
    """Removes exactly one subscription from exactly one event.

    The holder does not need a reference to the event itself.
    """

    __slots__ = ("_event", "_subscription")

    def __init__(self, event: CustomEvent, subscription: Subscription) -> None:
        self._event = event
        self._subscription = subscription

    @property
    def event(self) -> CustomEvent:
        return self._event

    @property
    def subscription(self) -> Subscription:
        return self._subscription

    @property
    def attached(self) -> bool:
        return not self._subscription.deleted

    def detach(self) -> bool:
        """Unsubscribe.  Returns False (and does nothing) if already detached."""
        return self._event._delete(self._subscription)

    def __repr__(self) -> str:
        state = "attached" if self.attached else "detached"
        return f"EventHandle({self._event}, {self._subscription.id!r}, {state})"
