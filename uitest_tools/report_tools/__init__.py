"""
================================================================================
Report Tools
================================================================================

Test result export and analysis.

Modules:
    - result_exporter: pytest plugin writing run results to JSON
    - result_parser: per-author statistics from exported results
    - allure_utils: Allure attachment helpers

================================================================================
"""

from .result_exporter import DEFAULT_OUTPUT_PATH, ResultExporter
from .result_parser import (
    CaseStatistics,
    ParsedCase,
    ReportFormatError,
    count_test_cases,
    format_statistics,
    load_run_summary,
    parse_test_case,
    parse_test_results,
)

__all__ = [
    "DEFAULT_OUTPUT_PATH",
    "ResultExporter",
    "ReportFormatError",
    "ParsedCase",
    "CaseStatistics",
    "parse_test_case",
    "load_run_summary",
    "parse_test_results",
    "count_test_cases",
    "format_statistics",
]
