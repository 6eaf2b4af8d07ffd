"""
================================================================================
UI Test Tools
================================================================================

Shared infrastructure for the UI test suites.

Modules:
    - common: Configuration, logging setup and file helpers
    - report_tools: Test result exporter (pytest plugin), result parser and
      Allure attachment helpers

Example:
    from uitest_tools.common import init_logger
    from uitest_tools.report_tools import parse_test_results, count_test_cases

    init_logger()
    cases = parse_test_results("testResult/test-results.json")
    stats = count_test_cases(cases)

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
