"""Synchronous publish/subscribe event dispatcher with optional event allow-list."""

from eventdispatch.core.constants import RESERVED_NAMES
from eventdispatch.core.errors import (
    AlreadyComposed,
    DispatchConfigurationError,
    DispatchError,
    EventNotAllowed,
    InvalidArgument,
)
from eventdispatch.core.events import EventDispatcher, Listener
from eventdispatch.core.mixin import compose

__version__ = "0.1.0"

__all__ = [
    "RESERVED_NAMES",
    "AlreadyComposed",
    "DispatchConfigurationError",
    "DispatchError",
    "EventDispatcher",
    "EventNotAllowed",
    "InvalidArgument",
    "Listener",
    "__version__",
    "compose",
]
