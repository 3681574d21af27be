"""Event layer: custom events, subscriptions and detach handles."""

from custom_event.event.custom_event import (
    DEFAULT_CONTEXT,
    FLAT,
    LIST,
    LOG_EVENT_TYPE,
    SUBSCRIBE_EVENT_TYPE,
    CustomEvent,
)
from custom_event.event.factory import create_event
from custom_event.event.handle import EventHandle
from custom_event.event.subscription import ContextOverride, Subscription

__all__ = [
    "ContextOverride",
    "CustomEvent",
    "DEFAULT_CONTEXT",
    "EventHandle",
    "FLAT",
    "LIST",
    "LOG_EVENT_TYPE",
    "SUBSCRIBE_EVENT_TYPE",
    "Subscription",
    "create_event",
]
