"""Shared fixtures for the custom-event test suite."""

from __future__ import annotations

import pytest

from custom_event.core.enums import Signature
from custom_event.core.ids import CounterIdAllocator
from custom_event.event.custom_event import CustomEvent


class RecordingSink:
    """Log sink that keeps every (message, severity) pair."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def __call__(self, message: str, severity: str) -> None:
        self.records.append((message, severity))

    def messages(self, severity: str | None = None) -> list[str]:
        return [m for m, s in self.records if severity is None or s == severity]


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def allocator() -> CounterIdAllocator:
    return CounterIdAllocator()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@pytest.fixture
def flat_event(sink, allocator) -> CustomEvent:
    """A FLAT event named 'changed' that logs into ``sink``."""
    return CustomEvent(
        "changed",
        signature=Signature.FLAT,
        id_allocator=allocator,
        log_sink=sink,
    )


@pytest.fixture
def list_event(sink, allocator) -> CustomEvent:
    """A LIST event named 'changed' that logs into ``sink``."""
    return CustomEvent(
        "changed",
        signature=Signature.LIST,
        id_allocator=allocator,
        log_sink=sink,
    )
