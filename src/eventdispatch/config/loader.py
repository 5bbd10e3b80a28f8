"""Dispatcher config loading and shape checks."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from eventdispatch.core.errors import DispatchConfigurationError

# Values assumed when the config file leaves them out
DEFAULTS: dict[str, Any] = {
    "log_listener_errors": True,
}

KNOWN_KEYS = frozenset({"allowed_events", "log_listener_errors"})


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_update(result[key], value)
        else:
            result[key] = value
    return result


def parse_bool(val: Any) -> bool | None:
    """Read a YAML or env flag; None if it is not a recognized bool."""
    if isinstance(val, bool):
        return val
    if not isinstance(val, str):
        return None
    v = val.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return None


def validate_config(data: dict[str, Any]) -> None:
    """Check the dispatcher keys; raise DispatchConfigurationError on a bad shape."""
    allowed = data.get("allowed_events")
    if allowed is not None:
        if not isinstance(allowed, list):
            raise DispatchConfigurationError(
                "allowed_events must be a list",
                code="invalid_allowed_events",
                details={"type": type(allowed).__name__},
            )
        for i, name in enumerate(allowed):
            if not isinstance(name, str) or not name:
                raise DispatchConfigurationError(
                    f"allowed_events[{i}] must be a non-empty string",
                    code="invalid_allowed_event",
                    details={"index": i},
                )
    flag = data.get("log_listener_errors")
    if flag is not None and parse_bool(flag) is None:
        raise DispatchConfigurationError(
            "log_listener_errors must be a boolean",
            code="invalid_log_listener_errors",
            details={"value": flag},
        )


def load_config(path: str | Path) -> dict[str, Any]:
    """Read the YAML config file; missing or non-mapping documents give {}.

    Unknown top-level keys are kept but logged, since a typo there silently
    disables a restriction.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Config file not found: {}", path)
        return {}

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        logger.error("Failed to parse config {}: {}", path, exc)
        raise
    if not isinstance(data, dict):
        logger.warning("Config file {} has invalid structure (expected dict)", path)
        return {}

    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        logger.warning("Config file {} has unknown keys: {}", path, ", ".join(map(str, unknown)))
    return data


def load_config_with_env(path: str | Path) -> dict[str, Any]:
    """Load .env into the process environment, then YAML merged over DEFAULTS."""
    from dotenv import load_dotenv

    load_dotenv()
    return _deep_update(DEFAULTS, load_config(path))
