"""Event dispatcher: per-event listener registry, once-listeners and allow-list."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from types import MethodType
from typing import TYPE_CHECKING, Any

from loguru import logger

from eventdispatch.core.constants import UNSET
from eventdispatch.core.errors import EventNotAllowed, InvalidArgument

if TYPE_CHECKING:
    from eventdispatch.config.schema import Config

Handler = Callable[[Any], Any]
ErrorCallback = Callable[[str, Handler, Exception], Any]


def validate_allowed_events(allowed_events: Any) -> frozenset[str] | None:
    """Validate an optional allow-list; return it frozen, or None when omitted.

    Only the UNSET marker means "unrestricted". An explicit None, a bare string,
    a set or any other non-sequence is rejected, as is a sequence holding
    anything but non-empty strings.
    """
    if allowed_events is UNSET:
        return None
    if not isinstance(allowed_events, Sequence) or isinstance(allowed_events, (str, bytes)):
        raise InvalidArgument(
            f"allowed_events must be a sequence of event names, got {type(allowed_events).__name__}",
            code="invalid_allowed_events",
            details={"type": type(allowed_events).__name__},
        )
    for i, name in enumerate(allowed_events):
        if not isinstance(name, str) or not name:
            raise InvalidArgument(
                f"allowed_events[{i}] must be a non-empty string, got {name!r}",
                code="invalid_allowed_event",
                details={"index": i},
            )
    return frozenset(allowed_events)


def _validate_event_name(event_name: Any) -> None:
    if not isinstance(event_name, str) or not event_name:
        raise InvalidArgument(
            f"Event name must be a non-empty string, got {event_name!r}",
            code="invalid_event_name",
            details={"event_name": event_name},
        )


def _validate_handler(handler: Any) -> None:
    if not callable(handler):
        raise InvalidArgument(
            f"Handler must be callable, got {type(handler).__name__}",
            code="invalid_handler",
            details={"type": type(handler).__name__},
        )


def _same_handler(registered: Handler, handler: Handler) -> bool:
    """Reference match; bound methods match on their object and function."""
    if registered is handler:
        return True
    # obj.method builds a new bound-method object on every access
    return (
        isinstance(registered, MethodType)
        and isinstance(handler, MethodType)
        and registered.__self__ is handler.__self__
        and registered.__func__ is handler.__func__
    )


@dataclass(eq=False)
class Listener:
    """Registered handler. Records and handlers both compare by identity."""

    handler: Handler
    once: bool = False
    spent: bool = field(default=False, repr=False)


class EventDispatcher:
    """Synchronous publish/subscribe dispatcher.

    Listeners fire in registration order. A failing listener is logged (and
    reported to ``on_error``) without stopping the rest of the emission.
    """

    def __init__(
        self,
        allowed_events: Sequence[str] | Any = UNSET,
        *,
        on_error: ErrorCallback | None = None,
        log_listener_errors: bool = True,
    ) -> None:
        self._allowed_events = validate_allowed_events(allowed_events)
        if on_error is not None and not callable(on_error):
            raise InvalidArgument("on_error must be callable", code="invalid_on_error")
        self._listeners: dict[str, list[Listener]] = {}
        self._on_error = on_error
        self._log_listener_errors = log_listener_errors

    @classmethod
    def from_config(cls, config: Config, *, on_error: ErrorCallback | None = None) -> EventDispatcher:
        """Build a dispatcher from a Config (allow-list and error logging)."""
        allowed = config.allowed_events
        return cls(
            UNSET if allowed is None else allowed,
            on_error=on_error,
            log_listener_errors=config.log_listener_errors,
        )

    @staticmethod
    def mixin(target: Any, allowed_events: Sequence[str] | Any = UNSET, **kwargs: Any) -> Any:
        """Compose dispatcher operations onto ``target``. See ``compose``."""
        from eventdispatch.core.mixin import compose

        return compose(target, allowed_events, **kwargs)

    @property
    def allowed_events(self) -> frozenset[str] | None:
        """Configured allow-list, or None when unrestricted."""
        return self._allowed_events

    def _check_event_name(self, event_name: Any) -> None:
        _validate_event_name(event_name)
        if self._allowed_events is not None and event_name not in self._allowed_events:
            raise EventNotAllowed(
                f"Event '{event_name}' is not allowed",
                code="event_not_allowed",
                details={"event_name": event_name},
            )

    def _add(self, event_name: Any, handler: Any, *, once: bool) -> None:
        self._check_event_name(event_name)
        _validate_handler(handler)
        self._listeners.setdefault(event_name, []).append(Listener(handler, once=once))
        logger.debug(
            "Registered {}handler {} for event '{}'", "once " if once else "", handler, event_name
        )

    def register(self, event_name: str | Any = UNSET, handler: Handler | Any = UNSET) -> None:
        """Register ``handler`` to be called with the payload of every ``event_name`` emit."""
        self._add(event_name, handler, once=False)

    def register_once(self, event_name: str | Any = UNSET, handler: Handler | Any = UNSET) -> None:
        """Register ``handler`` for the next ``event_name`` emit only."""
        self._add(event_name, handler, once=True)

    def unregister(self, event_name: str | Any = UNSET, handler: Handler | Any = UNSET) -> None:
        """Remove every registration of ``handler`` for ``event_name``.

        Unknown events and handlers that were never registered are ignored.
        """
        self._check_event_name(event_name)
        _validate_handler(handler)
        records = self._listeners.get(event_name)
        if not records:
            return
        kept = [r for r in records if not _same_handler(r.handler, handler)]
        if len(kept) == len(records):
            return
        logger.debug(
            "Unregistered {} record(s) of {} from event '{}'",
            len(records) - len(kept),
            handler,
            event_name,
        )
        if kept:
            records[:] = kept
        else:
            del self._listeners[event_name]

    def unregister_all(self, event_name: str | Any = UNSET) -> None:
        """Remove all listeners for ``event_name``, or for every event when omitted.

        Not subject to the allow-list so cleanup always succeeds.
        """
        if event_name is UNSET:
            if self._listeners:
                logger.debug("Cleared listeners for {} event(s)", len(self._listeners))
            self._listeners.clear()
            return
        _validate_event_name(event_name)
        removed = self._listeners.pop(event_name, None)
        if removed:
            logger.debug("Cleared {} listener(s) for event '{}'", len(removed), event_name)

    def emit(self, event_name: str | Any = UNSET, payload: Any = None) -> int:
        """Call every listener of ``event_name`` with ``payload``; return how many ran.

        Iterates over the listeners registered when the emit starts. Listener
        exceptions never reach the caller.
        """
        self._check_event_name(event_name)
        records = self._listeners.get(event_name)
        if not records:
            logger.debug("Emitting '{}' with no listeners", event_name)
            return 0

        snapshot = list(records)
        logger.debug("Emitting '{}' to {} listener(s)", event_name, len(snapshot))
        invoked = 0
        for record in snapshot:
            # Once-listener already fired, e.g. by a nested emit of the same event
            if record.spent:
                continue
            if record.once:
                record.spent = True
            invoked += 1
            try:
                record.handler(payload)
            except Exception as exc:
                self._report_failure(event_name, record.handler, exc)
            finally:
                if record.once:
                    self._discard(event_name, record)
        return invoked

    def has_listeners(self, event_name: str | Any = UNSET) -> bool:
        """Return True if at least one listener is registered for ``event_name``."""
        self._check_event_name(event_name)
        return event_name in self._listeners

    def listener_count(self, event_name: str | Any = UNSET) -> int:
        self._check_event_name(event_name)
        return len(self._listeners.get(event_name, ()))

    def event_names(self) -> list[str]:
        """Events that currently have listeners, in insertion order."""
        return list(self._listeners)

    def _discard(self, event_name: str, record: Listener) -> None:
        records = self._listeners.get(event_name)
        if not records or record not in records:
            return
        records.remove(record)
        if not records:
            del self._listeners[event_name]

    def _report_failure(self, event_name: str, handler: Handler, exc: Exception) -> None:
        level = "ERROR" if self._log_listener_errors else "DEBUG"
        logger.opt(exception=exc).log(
            level, "Listener {} for event '{}' failed: {}", handler, event_name, exc
        )
        if self._on_error is None:
            return
        try:
            self._on_error(event_name, handler, exc)
        except Exception as cb_exc:
            logger.exception("on_error callback failed for event '{}': {}", event_name, cb_exc)

    def __repr__(self) -> str:
        allowed = "unrestricted" if self._allowed_events is None else sorted(self._allowed_events)
        return f"<EventDispatcher events={len(self._listeners)} allowed={allowed}>"
