"""Configuration: YAML + env overlay."""

from eventdispatch.config.loader import (
    DEFAULTS,
    _deep_update,
    load_config,
    load_config_with_env,
    parse_bool,
    validate_config,
)
from eventdispatch.config.schema import Config, cfg

__all__ = [
    "DEFAULTS",
    "Config",
    "_deep_update",
    "cfg",
    "load_config",
    "load_config_with_env",
    "parse_bool",
    "validate_config",
]
