"""Custom exception hierarchy for the custom event package."""

from __future__ import annotations

from collections.abc import Iterator


class CustomEventError(Exception):
    """Base exception for all custom event errors."""


# --- Configuration ---
class ConfigError(CustomEventError):
    """Invalid or missing configuration."""


# --- Contract violations ---
class InvalidEventTypeError(CustomEventError, ValueError):
    """Event type must be a non-empty string."""


class InvalidSubscriberError(CustomEventError, TypeError):
    """subscribe() was called without a callable callback."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"Invalid callback for CE: '{event_type}'")


# --- Dispatch ---
class ChainedError(CustomEventError):
    """Wraps one or more exceptions raised by subscribers during one fire.

    The summary message is all that ``str()`` shows.  The wrapped
    exceptions are consumed explicitly, either one at a time through
    :meth:`next` or by iterating the instance.
    """

    name = "ChainedError"

    def __init__(
        self,
        message: str,
        errors: list[BaseException] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors: list[BaseException] = list(errors) if errors else []
        self.index = 0

    def get_message(self) -> str:
        return self.message

    def to_string(self) -> str:
        return f"{self.name}: {self.get_message()}"

    def next(self) -> BaseException | None:
        """Return the next wrapped exception, or ``None`` when exhausted."""
        error = self.errors[self.index] if self.index < len(self.errors) else None
        self.index += 1
        return error

    def add(self, error: BaseException) -> None:
        self.errors.append(error)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return self.to_string()

    def __iter__(self) -> Iterator[BaseException]:
        return iter(list(self.errors))

    def __len__(self) -> int:
        return len(self.errors)
