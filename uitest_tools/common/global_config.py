"""
================================================================================
Global Configuration for UI Test Tools
================================================================================

Centralized configuration and logging setup shared by the page-element
framework, the result exporter and the command line runner.

Features:
    - Singleton configuration manager
    - YAML-based configuration loading
    - Environment variable overrides
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger


# Looked up in order; the first existing file wins
DEFAULT_CONFIG_PATHS = [
    Path("config") / "uitest_tools.yaml",
    Path(__file__).parent.parent.parent / "config" / "uitest_tools.yaml",
]

# Environment variable -> dot-notation config key
ENV_MAPPING: Dict[str, str] = {
    "LOCATOR_MAX_ATTEMPTS": "locator.max_attempts",
    "LOCATOR_VISIBILITY_ATTEMPTS": "locator.visibility_attempts",
    "LOCATOR_TIMEOUT_MS": "locator.timeout_ms",
    "LOCATOR_DESCRIPTION": "locator.description",
    "RESULT_JSON_PATH": "report.output_path",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class GlobalConfig:
    """
    Singleton class to manage global configuration.

    Loads settings from a YAML file and environment variables.
    Environment variables take precedence over file-based configuration.
    """
    _instance: Optional["GlobalConfig"] = None

    def __new__(cls, config_path: Optional[Union[str, Path]] = None) -> "GlobalConfig":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        if self._initialized:
            return
        self._config: Dict[str, Any] = {}
        self._config_path = self._find_config_path(config_path)
        self._load_configs()
        self._initialized = True

    @staticmethod
    def _find_config_path(config_path: Optional[Union[str, Path]]) -> Optional[Path]:
        if config_path is not None:
            return Path(config_path)
        env_path = os.environ.get("UITEST_TOOLS_CONFIG")
        if env_path:
            return Path(env_path)
        for candidate in DEFAULT_CONFIG_PATHS:
            if candidate.exists():
                return candidate
        return None

    def _load_configs(self) -> None:
        """
        Loads configuration from the YAML file and environment variables.
        """
        if self._config_path is not None and self._config_path.exists():
            try:
                with open(self._config_path, "r", encoding="utf-8") as f:
                    self._config.update(yaml.safe_load(f) or {})
                logger.debug(f"Loaded configuration from {self._config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self._config_path}: {e}")
        elif self._config_path is not None:
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )

        for env_key, config_key in ENV_MAPPING.items():
            if env_key in os.environ:
                self._set_nested(config_key, os.environ[env_key])

    def _set_nested(self, key: str, value: Any) -> None:
        """
        Sets a nested configuration value using dot notation.
        """
        keys = key.split(".")
        current = self._config
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "locator.timeout_ms")
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Sets a configuration value at runtime."""
        self._set_nested(key, value)

    def get_all(self) -> Dict[str, Any]:
        """Returns a copy of the entire configuration dictionary."""
        return dict(self._config)

    @classmethod
    def reset(cls) -> None:
        """
        Reset the singleton instance.

        Used by tests that need to reload configuration with different
        files or environment variables.
        """
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Example:
        timeout = get_config("locator.timeout_ms", 5000)
    """
    return GlobalConfig().get(key, default)


def set_config(key: str, value: Any) -> None:
    """Convenience function to set a configuration value."""
    GlobalConfig().set(key, value)


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
        force: Reconfigure even if the logger was already initialized.

    Example:
        init_logger()
        init_logger(level="DEBUG", log_file="logs/ui_tests.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    logger.remove()

    level = (level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


__all__ = [
    "GlobalConfig",
    "get_config",
    "set_config",
    "init_logger",
]
