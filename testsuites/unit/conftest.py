"""
================================================================================
Unit Test Configuration
================================================================================

Configuration isolation for every unit test, and the fake browser
capability fixture.

================================================================================
"""

import pytest

from testsuites.unit.fake_capability import FakeCapability
from uitest_tools.common import GlobalConfig
from uitest_tools.common.global_config import ENV_MAPPING


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """
    Fresh GlobalConfig for every test, loaded from an empty file and with
    no configuration environment variables.
    """
    config_file = tmp_path / "uitest_tools.yaml"
    config_file.write_text("{}\n", encoding="utf-8")
    monkeypatch.setenv("UITEST_TOOLS_CONFIG", str(config_file))
    for env_key in ENV_MAPPING:
        monkeypatch.delenv(env_key, raising=False)

    GlobalConfig.reset()
    yield config_file
    GlobalConfig.reset()


@pytest.fixture
def capability() -> FakeCapability:
    return FakeCapability()
