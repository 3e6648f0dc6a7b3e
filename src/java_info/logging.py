"""Python-standard logging configuration for java-info.

Logging is configured with ``logging.config.dictConfig()`` from a YAML file.
The default configuration ships inside the package as ``logging.yaml``.
Library modules only ever call ``logging.getLogger(__name__)``; this module is
used by the CLI.
"""

from __future__ import annotations

import logging
import logging.config
import sys
from importlib.resources import files
from pathlib import Path
from typing import Any

import yaml


class LoggingError(Exception):
    """Exception raised for logging configuration errors."""

    pass


def get_config_path() -> Path:
    """Get the path to the packaged logging configuration file.

    Raises:
        LoggingError: If the packaged configuration is missing

    """
    config_path = Path(str(files("java_info") / "logging.yaml"))
    if not config_path.exists():
        raise LoggingError(f"No logging configuration found. Expected at: {config_path}")
    return config_path


def load_config(config_path: Path) -> dict[str, Any]:
    """Load logging configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Logging configuration dictionary

    Raises:
        LoggingError: If configuration cannot be loaded or parsed

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise LoggingError(f"Invalid configuration format in {config_path}")

        return config  # type: ignore[return-value]

    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e


def _override_level(config: dict[str, Any], level: str) -> None:
    """Apply ``level`` to every logger, the root logger and stricter handlers."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise LoggingError(f"Invalid log level: {level}")

    for logger_name in config.get("loggers", {}):
        config["loggers"][logger_name]["level"] = level.upper()

    if "root" in config:
        config["root"]["level"] = level.upper()

    # Handlers filter below their own level, so only ever lower them
    for handler_config in config.get("handlers", {}).values():
        if isinstance(handler_config, dict) and "level" in handler_config:
            current = getattr(logging, str(handler_config["level"]), logging.INFO)
            if numeric_level < current:
                handler_config["level"] = level.upper()


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    force_basic: bool = False,
) -> None:
    """Configure logging using Python standard dictConfig.

    Args:
        config_path: Path to logging configuration file (packaged default if None)
        level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force_basic: Force basic console logging (fallback mode)

    """
    if force_basic:
        _setup_basic_logging(level or "WARNING")
        return

    try:
        if isinstance(config_path, str):
            config_path = Path(config_path)
        elif config_path is None:
            config_path = get_config_path()

        config = load_config(config_path)
        if level:
            _override_level(config, level)

        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug("Logging configured from: %s", config_path)

    except (LoggingError, ImportError, KeyError, ValueError, TypeError) as e:
        fallback_level = level or "WARNING"
        _setup_basic_logging(fallback_level)
        logging.getLogger(__name__).warning(
            "Failed to configure logging from file (%s), using basic console logging at %s level",
            e,
            fallback_level,
        )


def _setup_basic_logging(level: str) -> None:
    """Set up basic console logging as fallback.

    Args:
        level: Logging level string

    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
