"""
================================================================================
UI Test Tools Common Utilities
================================================================================

Shared configuration management, logging setup and file helpers.

Exports:
    - GlobalConfig: Singleton configuration manager
    - get_config / set_config: Dot-notation access to configuration values
    - init_logger: Initialize the loguru logger with standard settings
    - read_file / truncate_file_path / ensure_directory: File helpers

Usage:
    from uitest_tools.common import get_config, init_logger

    init_logger()
    timeout = get_config("locator.timeout_ms", 5000)

================================================================================
"""

from .file_utils import ensure_directory, read_file, truncate_file_path
from .global_config import GlobalConfig, get_config, init_logger, set_config

__all__ = [
    "GlobalConfig",
    "get_config",
    "set_config",
    "init_logger",
    "read_file",
    "truncate_file_path",
    "ensure_directory",
]
