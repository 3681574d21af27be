"""Custom event factory.

Creates events whose defaults come from ``Settings``.
"""

from __future__ import annotations

from typing import Any

from custom_event.core.config import Settings
from custom_event.core.enums import Signature
from custom_event.core.ids import IdAllocator, create_id_allocator
from custom_event.observability.logger import LogSink

from .custom_event import CustomEvent


def create_event(
    type: str,
    context: Any = None,
    *,
    settings: Settings | None = None,
    signature: Signature | None = None,
    id_allocator: IdAllocator | None = None,
    log_sink: LogSink | None = None,
) -> CustomEvent:
    """Create a ``CustomEvent`` configured from *settings*.

    - ``signature`` falls back to ``settings.default_signature``.
    - ``silent`` and ``fire_once`` are copied from settings.
    - The id allocator kind comes from ``settings.id_allocator`` unless
      an allocator instance is passed.

    Args:
        type: Event name.
        context: Default execution context for subscribers.
        settings: Defaults to ``Settings()`` (env vars applied).
        signature: Explicit signature, overriding settings.
        id_allocator: Explicit allocator, overriding settings.
        log_sink: Optional side-channel sink.
    """
    settings = settings or Settings()

    event = CustomEvent(
        type,
        context,
        settings.silent,
        signature or settings.default_signature,
        id_allocator=id_allocator or create_id_allocator(settings.id_allocator),
        log_sink=log_sink,
    )
    event.fire_once = settings.fire_once
    return event
