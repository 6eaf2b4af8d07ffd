"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project-wide markers and tags collected tests with their
suite marker (``unit`` or ``ui``) based on where they live.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "integration: Tests driving a real browser"
    )

    # Suite markers
    config.addinivalue_line(
        "markers", "unit: Tests running against the in-memory fake capability"
    )
    config.addinivalue_line(
        "markers", "ui: Tests running against a Playwright page"
    )


def pytest_collection_modifyitems(config, items):
    """Add the suite marker of each test from its directory."""
    for item in items:
        path = str(item.fspath).replace("\\", "/")

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        if "testsuites/unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "UI Test Toolkit",
        "=" * 60,
        "",
    ]
