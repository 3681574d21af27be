"""Subscription id allocators.

Every ``Subscription`` is stamped with an id that keys it inside its
event's subscriber mapping.  The allocator is injected into
``CustomEvent``; nothing in the package keeps a hidden global counter.

Allocator Kinds
---------------
1. UUID: ``UuidIdAllocator`` returns UUID v4 strings.  Unique across the
   process without shared state.  Default.
2. Counter: ``CounterIdAllocator`` returns ``"<prefix>_<n>"`` with a
   monotonically increasing ``n``.  Deterministic, handy in tests.
"""

from __future__ import annotations

import itertools
import uuid
from typing import Protocol, runtime_checkable

from .enums import IdAllocatorKind


def new_id() -> str:
    """Generate a new UUID v4 string."""
    return str(uuid.uuid4())


@runtime_checkable
class IdAllocator(Protocol):
    """Source of unique subscription ids."""

    def allocate(self) -> str: ...


class UuidIdAllocator:
    def allocate(self) -> str:
        return new_id()


class CounterIdAllocator:
    """Monotonic ``prefix_N`` ids, starting at *start*."""

    def __init__(self, prefix: str = "sub", start: int = 0) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def allocate(self) -> str:
        return f"{self._prefix}_{next(self._counter)}"


def create_id_allocator(kind: IdAllocatorKind) -> IdAllocator:
    if kind == IdAllocatorKind.COUNTER:
        return CounterIdAllocator()
    return UuidIdAllocator()
