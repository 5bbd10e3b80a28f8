"""Dispatcher domain exceptions."""

from __future__ import annotations


class DispatchError(Exception):
    """Base for dispatcher domain errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class InvalidArgument(DispatchError, ValueError):
    """Malformed event name, handler, allow-list or composition target."""


class EventNotAllowed(DispatchError, LookupError):
    """Event name is well formed but missing from the configured allow-list."""


class AlreadyComposed(DispatchError):
    """Composition target already exposes a reserved operation name."""


class DispatchConfigurationError(DispatchError):
    """Config validation or load failure."""
