"""Named, synchronously fired custom events.

Design goals
------------
1.  **Snapshot dispatch**: ``fire()`` copies the subscriber mapping
    before the pass, so subscribers that subscribe or unsubscribe while
    being notified do not change the pass in progress.
2.  **Two signatures, two error policies**: ``Signature.LIST``
    subscribers receive ``(context, type, args, companion)`` and their
    exceptions are captured and re-raised together as a ``ChainedError``
    once the pass ends.  ``Signature.FLAT`` subscribers receive
    ``(context, *args)`` and their exceptions propagate immediately,
    aborting the pass.
3.  **Veto**: a subscriber returning literally ``False`` stops the pass
    and makes ``fire()`` return ``False``.  Errors captured before the
    veto are still raised.
4.  **Fire-once**: with ``fire_once`` set, a subscriber added after the
    event has fired is notified straight away with the last fire's
    arguments.
5.  **Subscribe notification**: every event owns a silent
    ``subscribe_event`` that fires just before a new subscriber is
    registered.

The execution context is passed as the first positional argument, the
way an unbound method receives ``self``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from custom_event.core.enums import Signature
from custom_event.core.errors import (
    ChainedError,
    InvalidEventTypeError,
    InvalidSubscriberError,
)
from custom_event.core.ids import IdAllocator, UuidIdAllocator
from custom_event.observability.logger import LogSink, StructlogSink, trace_scope

from .handle import EventHandle
from .subscription import UNSET, ContextOverride, Subscription, bind_companion

# Reserved type names.
LOG_EVENT_TYPE = "event:log"
SUBSCRIBE_EVENT_TYPE = "subscribe-notification"

LIST = Signature.LIST
FLAT = Signature.FLAT


class _DefaultContext:
    """Process-wide execution context for events created without one."""

    def __repr__(self) -> str:
        return "DEFAULT_CONTEXT"


DEFAULT_CONTEXT = _DefaultContext()

_default_sink = StructlogSink()


def _supplied(callback: Any, companion: Any, override: Any) -> tuple[Any, ...]:
    """Positional arguments of a subscribe() call, without trailing omissions."""
    if override is not UNSET:
        return (callback, None if companion is UNSET else companion, override)
    if companion is not UNSET:
        return (callback, companion)
    return (callback,)


class CustomEvent:
    """An event that components subscribe to and that its owner fires.

    Parameters
    ----------
    type
        Event name, handed to LIST subscribers on every fire.
    context
        Default execution context for subscribers.  ``DEFAULT_CONTEXT``
        when omitted.
    silent
        Suppress side-channel logging.  Always on for ``LOG_EVENT_TYPE``.
    signature
        ``Signature.FLAT`` (default) or ``Signature.LIST``.
    id_allocator
        Source of subscription ids.  UUIDs by default.
    log_sink
        Receives ``(message, severity)`` for every log line of a
        non-silent event.  structlog by default.
    """

    def __init__(
        self,
        type: str,
        context: Any = None,
        silent: bool = False,
        signature: Signature = Signature.FLAT,
        *,
        id_allocator: IdAllocator | None = None,
        log_sink: LogSink | None = None,
    ) -> None:
        if not isinstance(type, str) or not type:
            raise InvalidEventTypeError(
                f"Event type must be a non-empty string, got {type!r}"
            )

        self._type = type
        self.context = context if context is not None else DEFAULT_CONTEXT
        self.silent = bool(silent) or type == LOG_EVENT_TYPE
        self.signature = Signature(signature)
        self.subscribers: dict[str, Subscription] = {}
        self._id_allocator = id_allocator or UuidIdAllocator()
        self._log_sink = log_sink or _default_sink

        self.log(f"Creating {self}")

        self.subscribe_event: CustomEvent | None = None
        if type != SUBSCRIBE_EVENT_TYPE:
            self.subscribe_event = CustomEvent(
                SUBSCRIBE_EVENT_TYPE,
                self,
                True,
                id_allocator=self._id_allocator,
                log_sink=self._log_sink,
            )

        self.fired = False
        self.fire_once = False
        self.last_error: BaseException | None = None
        self._last_args: tuple[Any, ...] = ()

    @property
    def type(self) -> str:
        return self._type

    @property
    def is_subscribe_notification(self) -> bool:
        return self._type == SUBSCRIBE_EVENT_TYPE

    # -- Subscription --------------------------------------------------------

    def subscribe(
        self,
        callback: Callable[..., Any],
        companion: Any = UNSET,
        override: ContextOverride | bool | Any = UNSET,
    ) -> EventHandle:
        """Subscribe *callback* to this event.

        Args:
            callback: Invoked on every fire.
            companion: Optional object passed back to the callback.
            override: ``ContextOverride``; ``True`` makes *companion* the
                execution context and any other object becomes the
                context itself.

        Returns:
            An ``EventHandle`` whose ``detach()`` removes this subscription.

        Raises:
            InvalidSubscriberError: *callback* is missing or not callable.
            Exception: On a fire-once event that already fired, whatever
                the replayed subscriber raised.  The subscription is not
                registered in that case.
        """
        if callback is None or not callable(callback):
            raise InvalidSubscriberError(self._type)

        if self.subscribe_event is not None:
            self.subscribe_event.fire(*_supplied(callback, companion, override))

        companion = None if companion is UNSET else companion
        override = None if override is UNSET else override

        effective = callback
        if companion is not None and self.signature == Signature.FLAT:
            effective = bind_companion(callback, companion)

        sub = Subscription(
            self._id_allocator.allocate(),
            effective,
            companion,
            ContextOverride.coerce(override),
            original_callback=callback,
        )

        if self.fire_once and self.fired:
            self.last_error = None
            self._notify(sub, self._last_args)
            if self.last_error is not None:
                raise self.last_error

        self.subscribers[sub.id] = sub

        return EventHandle(self, sub)

    def unsubscribe(
        self,
        target: EventHandle | Callable[..., Any] | None = None,
        companion: Any = UNSET,
    ) -> bool:
        """Remove subscribers.

        Args:
            target: An ``EventHandle`` to detach, or the subscribed
                function.  When omitted every subscriber is removed.
            companion: Only remove subscriptions made with this companion.
                Disambiguates one function subscribed for many objects.

        Returns:
            True if at least one subscription was removed.
        """
        if isinstance(target, EventHandle):
            return target.detach()

        if target is None:
            return self.unsubscribe_all() > 0

        found = False
        for sub in list(self.subscribers.values()):
            if sub.contains(target, companion):
                self._delete(sub)
                found = True

        return found

    def unsubscribe_all(self) -> int:
        """Remove all subscribers.  Returns the number removed."""
        subs = list(self.subscribers.values())
        for sub in subs:
            sub.tombstone()
        self.subscribers = {}
        return len(subs)

    def _delete(self, sub: Subscription) -> bool:
        removed = self.subscribers.pop(sub.id, None) is not None
        tombstoned = sub.tombstone()
        return removed or tombstoned

    # -- Dispatch ------------------------------------------------------------

    def fire(self, *args: Any) -> bool:
        """Notify a snapshot of the current subscribers.

        Returns:
            False if a subscriber returned False, True otherwise.

        Raises:
            ChainedError: One or more LIST subscribers raised.  Raised after
                the pass, also when a later subscriber vetoed.
            Exception: Whatever a FLAT subscriber raised, immediately.
        """
        with trace_scope():
            return self._fire(args)

    def _fire(self, args: tuple[Any, ...]) -> bool:
        subs = list(self.subscribers.values())
        ret = True

        self.log(f"Firing {self}, args: {args!r}")

        errors: list[BaseException] = []

        for sub in subs:
            if sub.deleted or sub.callback is None:
                continue
            self.last_error = None
            ret = self._notify(sub, args)
            if self.last_error is not None:
                errors.append(self.last_error)
            if not ret:
                break

        if not self.is_subscribe_notification:
            self.fired = True
            if self.fire_once:
                self._last_args = args

        if errors:
            raise ChainedError(
                f"{self._type}: 1 or more subscribers threw an error: {errors[0]}",
                errors,
            )

        return ret

    def _notify(self, sub: Subscription, args: tuple[Any, ...]) -> bool:
        self.log(f"{self._type}->: {sub!r}")

        context = sub.get_scope(self.context)
        callback = sub.callback
        assert callback is not None

        ret: Any = None
        if not self.signature.isolates_errors:
            ret = callback(context, *args)
        else:
            try:
                ret = callback(context, self._type, args, sub.companion)
            except Exception as exc:
                self.last_error = exc
                self.log(f"{self} subscriber exception: {exc!r}", "error")

        if ret is False:
            self.log("Event cancelled by subscriber")
            return False

        return True

    # -- Logging -------------------------------------------------------------

    def log(self, message: str, severity: str = "info") -> None:
        if not self.silent:
            self._log_sink(message, severity)

    def __str__(self) -> str:
        return f"'{self._type}'"

    def __repr__(self) -> str:
        return (
            f"CustomEvent(type={self._type!r}, signature={self.signature.value}, "
            f"subscribers={len(self.subscribers)})"
        )
