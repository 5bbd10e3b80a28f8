"""Re-export from core.errors."""

from eventdispatch.core.errors import (
    AlreadyComposed,
    DispatchConfigurationError,
    DispatchError,
    EventNotAllowed,
    InvalidArgument,
)

__all__ = [
    "AlreadyComposed",
    "DispatchConfigurationError",
    "DispatchError",
    "EventNotAllowed",
    "InvalidArgument",
]
