"""
Repository-level pytest configuration.

  - Loads the result exporter plugin (``--result-json``)
  - Sets predictable environment defaults for local runs
  - Initializes logging once per session

Values already provided by the user or CI are never overwritten.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from uitest_tools.common import GlobalConfig, init_logger


pytest_plugins = ["uitest_tools.report_tools.result_exporter"]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "LOG_LEVEL": "INFO",
        "LOCATOR_TIMEOUT_MS": "5000",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    GlobalConfig.reset()
    init_logger()

    yield
