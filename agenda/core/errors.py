"""Exception types raised by the agenda core."""
from __future__ import annotations


class AgendaError(Exception):
    """Base class for agenda errors."""


class MalformedPartitionError(AgendaError):
    """A stored partition does not decode to a valid task record array."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Malformed partition {key!r}: {reason}")
        self.key = key
        self.reason = reason


class InvalidDateKeyError(AgendaError, ValueError):
    """A value is not a ``YYYY-MM-DD`` calendar day."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid date key: {value!r}")
        self.value = value


class StoreWriteError(AgendaError):
    """The partition store rejected a write."""

    def __init__(self, key: str, reason: str | None = None) -> None:
        message = f"Failed to write {key!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.key = key
        # Unsaved carry-over outcome, set when raised from reconciliation.
        self.result = None


class DuplicateTaskError(AgendaError, ValueError):
    """The day already holds a task with the same identity."""

    def __init__(self, identity: str, date_key: str) -> None:
        super().__init__(f"Task {identity!r} already exists on {date_key}")
        self.identity = identity
        self.date_key = date_key


__all__ = [
    "AgendaError",
    "DuplicateTaskError",
    "InvalidDateKeyError",
    "MalformedPartitionError",
    "StoreWriteError",
]
