"""Entrypoint. Loads config, builds a dispatcher and reports its event policy."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml
from loguru import logger

from eventdispatch import __version__
from eventdispatch.config import Config, cfg, load_config_with_env
from eventdispatch.core.errors import DispatchConfigurationError, InvalidArgument
from eventdispatch.core.events import EventDispatcher


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru. Replace default logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | {message}"
        ),
    )


def reload_config(config_path: Path) -> Config:
    """Load config from path and update global cfg."""
    data = load_config_with_env(config_path)
    cfg.reload(data)
    return cfg


def main(argv: list[str] | None = None) -> None:
    """Main entrypoint."""
    parser = argparse.ArgumentParser(
        description="eventdispatch — validate a dispatcher config and report its event policy"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("eventdispatch.yaml"),
        help="Path to config file (default: eventdispatch.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.config.exists():
        logger.error("Config file not found: {}", args.config)
        sys.exit(1)

    try:
        config = reload_config(args.config)
        dispatcher = EventDispatcher.from_config(config)
    except (yaml.YAMLError, DispatchConfigurationError, InvalidArgument) as exc:
        logger.error("Invalid config {}: {}", args.config, exc)
        sys.exit(1)
    logger.info("Config loaded from {}", args.config)

    allowed = dispatcher.allowed_events
    if allowed is None:
        logger.info("Dispatcher ready — unrestricted event names")
    else:
        logger.info(
            "Dispatcher ready — {} allowed events: {}", len(allowed), ", ".join(sorted(allowed))
        )


if __name__ == "__main__":
    main()
