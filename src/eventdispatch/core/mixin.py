"""Compose dispatcher operations onto an existing object."""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from typing import Any, TypeVar

from loguru import logger

from eventdispatch.core.constants import RESERVED_NAMES, UNSET
from eventdispatch.core.errors import AlreadyComposed, InvalidArgument
from eventdispatch.core.events import ErrorCallback, EventDispatcher

T = TypeVar("T")

_IMMUTABLE_TYPES = (str, bytes, int, float, complex, bool, tuple, frozenset, range)


def _conflicts(target: Any, is_mapping: bool) -> list[str]:
    if is_mapping:
        return [name for name in RESERVED_NAMES if name in target]
    return [name for name in RESERVED_NAMES if hasattr(target, name)]


def compose(
    target: T | Any = UNSET,
    allowed_events: Sequence[str] | Any = UNSET,
    *,
    on_error: ErrorCallback | None = None,
) -> T:
    """Give ``target`` the dispatcher operations of a private EventDispatcher.

    Attributes are set on plain objects; mutable mappings receive the
    operations as keys instead. The target is mutated in place and returned.

    Raises:
        InvalidArgument: target is missing, None, immutable or refuses the
            operations (anything already attached is removed again),
            or ``allowed_events`` is malformed.
        AlreadyComposed: target already exposes one of the reserved names. The
            target is left unchanged.
    """
    if target is UNSET or target is None or isinstance(target, _IMMUTABLE_TYPES):
        raise InvalidArgument(
            f"Cannot compose onto {type(target).__name__}",
            code="invalid_target",
            details={"type": type(target).__name__},
        )
    is_mapping = isinstance(target, MutableMapping)
    if not is_mapping and not hasattr(target, "__dict__"):
        raise InvalidArgument(
            f"Cannot compose onto {type(target).__name__}: no instance attributes",
            code="invalid_target",
            details={"type": type(target).__name__},
        )

    dispatcher = EventDispatcher(allowed_events, on_error=on_error)

    conflicts = _conflicts(target, is_mapping)
    if conflicts:
        raise AlreadyComposed(
            f"{type(target).__name__} already defines {', '.join(conflicts)}",
            code="already_composed",
            details={"names": conflicts},
        )

    attached: list[str] = []
    try:
        for name in RESERVED_NAMES:
            operation = getattr(dispatcher, name)
            if is_mapping:
                target[name] = operation  # type: ignore[index]
            else:
                setattr(target, name, operation)
            attached.append(name)
    except Exception as exc:
        for name in attached:
            if is_mapping:
                del target[name]  # type: ignore[attr-defined]
            else:
                delattr(target, name)
        raise InvalidArgument(
            f"Cannot compose onto {type(target).__name__}: {exc}",
            code="invalid_target",
            details={"type": type(target).__name__},
            original_error=exc,
        ) from exc

    logger.debug("Composed event dispatcher onto {}", type(target).__name__)
    return target
