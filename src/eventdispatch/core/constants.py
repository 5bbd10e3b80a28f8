"""Dispatcher constants."""

from __future__ import annotations

from typing import Final

# Operations a composed target gains; composition refuses targets that already have any.
RESERVED_NAMES: Final[tuple[str, ...]] = (
    "register",
    "register_once",
    "unregister",
    "unregister_all",
    "emit",
    "has_listeners",
)


class _Unset:
    """Marker for arguments that were not passed at all (distinct from None)."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()
