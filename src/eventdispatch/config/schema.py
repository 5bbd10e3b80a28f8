"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from eventdispatch.config.loader import parse_bool, validate_config

# Env keys that override config (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "EVENTDISPATCH_ALLOWED_EVENTS",
    "EVENTDISPATCH_LOG_LISTENER_ERRORS",
)


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


class Config:
    """Config accessor with attribute-style access for nested keys."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace config data and re-read env overrides."""
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            validate_config(self._data)
        allowed = self.allowed_events
        logger.debug(
            "Config reloaded: {}",
            "unrestricted events" if allowed is None else f"{len(allowed)} allowed events",
        )

    @property
    def raw(self) -> dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path."""
        parts = key.split(".")
        obj: Any = self._data
        for part in parts:
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def allowed_events(self) -> list[str] | None:
        """Event allow-list; None means any event name is accepted.

        EVENTDISPATCH_ALLOWED_EVENTS (comma-separated) replaces the file value.
        """
        env = self._env.get("EVENTDISPATCH_ALLOWED_EVENTS", "")
        names = [n.strip() for n in env.split(",") if n.strip()]
        if names:
            return names
        allowed = self._data.get("allowed_events")
        return list(allowed) if isinstance(allowed, list) else None

    @property
    def log_listener_errors(self) -> bool:
        sources = (
            self._env.get("EVENTDISPATCH_LOG_LISTENER_ERRORS", ""),
            self._data.get("log_listener_errors"),
        )
        for raw in sources:
            parsed = parse_bool(raw)
            if parsed is not None:
                return parsed
        return True


# Global config instance (set by __main__)
cfg: Config = Config({})
