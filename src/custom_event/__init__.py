"""Synchronous custom events with subscriber error aggregation.

Sub-packages:
    core/           Enums, errors, id allocators, settings.
    event/          CustomEvent, Subscription, EventHandle, factory.
    observability/  structlog setup and the event log sink.
"""

from custom_event.core.enums import Signature
from custom_event.core.errors import (
    ChainedError,
    CustomEventError,
    InvalidSubscriberError,
)
from custom_event.event import (
    DEFAULT_CONTEXT,
    FLAT,
    LIST,
    ContextOverride,
    CustomEvent,
    EventHandle,
    create_event,
)

__all__ = [
    "ChainedError",
    "ContextOverride",
    "CustomEvent",
    "CustomEventError",
    "DEFAULT_CONTEXT",
    "EventHandle",
    "FLAT",
    "InvalidSubscriberError",
    "LIST",
    "Signature",
    "create_event",
]
