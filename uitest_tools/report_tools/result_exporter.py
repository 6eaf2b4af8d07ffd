"""
================================================================================
Test Result Exporter
================================================================================

Pytest plugin that serializes the results of a run into a single JSON file
when the session finishes.

Enable it with ``--result-json PATH`` (or the ``RESULT_JSON_PATH``
environment variable). Test titles default to the test function name and
can be set explicitly with the ``case_title`` marker:

    @pytest.mark.case_title("alice#12【Login】valid credentials reach dashboard")
    async def test_login_success(...):
        ...

Output layout (one entry per test file):

    {
      "num_total_tests": 3, "num_passed_tests": 2, ...,
      "test_results": [
        {
          "test_file_path": "/repo/testsuites/unit/test_login.py",
          "perf_stats": {"start": ..., "end": ..., "runtime": ...},
          "test_results": [
            {"title": "...", "ancestor_titles": ["TestLogin"],
             "duration": 12.5, "status": "passed", "failure_messages": []}
          ]
        }
      ]
    }

================================================================================
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest
from loguru import logger

from uitest_tools.common import ensure_directory, get_config


DEFAULT_OUTPUT_PATH = Path("testResult") / "test-results.json"
TITLE_MARKER = "case_title"
PLUGIN_NAME = "uitest-result-exporter"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _split_nodeid(nodeid: str) -> Dict[str, Any]:
    """Split ``path::Class::test[param]`` into file, ancestors and name."""
    parts = nodeid.split("::")
    return {
        "file": parts[0],
        "ancestors": parts[1:-1],
        "name": parts[-1] if len(parts) > 1 else parts[0],
    }


class ResultExporter:
    """
    Collects test reports during a session and writes them as JSON.

    Args:
        output_path: File the results are written to
        rootdir: Directory test file paths are resolved against
    """

    def __init__(self, output_path: Union[str, Path], rootdir: Optional[Union[str, Path]] = None):
        self.output_path = Path(output_path)
        self.rootdir = Path(rootdir) if rootdir is not None else Path.cwd()
        self.start_time = _now_ms()
        self._suites: Dict[str, Dict[str, Any]] = {}
        self._cases: Dict[str, Dict[str, Any]] = {}

    # =========================================================================
    # Pytest Hooks
    # =========================================================================

    def pytest_runtest_setup(self, item: pytest.Item) -> None:
        marker = item.get_closest_marker(TITLE_MARKER)
        if marker is not None and marker.args:
            item.user_properties.append((TITLE_MARKER, str(marker.args[0])))

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        if report.when == "call" or (report.when == "setup" and not report.passed):
            self.record(report)
        elif report.when == "teardown" and report.failed:
            self._mark_teardown_failure(report)

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        self.write()

    def pytest_terminal_summary(self, terminalreporter: Any) -> None:
        terminalreporter.write_sep("-", f"test results exported to {self.output_path}")

    # =========================================================================
    # Collection
    # =========================================================================

    def record(self, report: pytest.TestReport) -> Dict[str, Any]:
        """Record the outcome of one test from its report."""
        parts = _split_nodeid(report.nodeid)
        properties = dict(report.user_properties)

        case = {
            "title": properties.get(TITLE_MARKER, parts["name"]),
            "ancestor_titles": parts["ancestors"],
            "duration": round(report.duration * 1000, 3),
            "status": self._status(report),
            "failure_messages": [report.longreprtext] if report.failed else [],
        }

        suite = self._suite(parts["file"])
        finished = _now_ms()
        suite["perf_stats"]["start"] = min(
            suite["perf_stats"]["start"], finished - int(case["duration"])
        )
        suite["perf_stats"]["end"] = max(suite["perf_stats"]["end"], finished)
        suite["test_results"].append(case)
        self._cases[report.nodeid] = case
        return case

    def _mark_teardown_failure(self, report: pytest.TestReport) -> None:
        case = self._cases.get(report.nodeid)
        if case is None:
            self.record(report)
            return
        case["status"] = "failed"
        case["failure_messages"].append(report.longreprtext)

    @staticmethod
    def _status(report: pytest.TestReport) -> str:
        if report.passed:
            return "passed"
        if report.skipped:
            return "skipped"
        return "failed"

    def _suite(self, file_path: str) -> Dict[str, Any]:
        if file_path not in self._suites:
            self._suites[file_path] = {
                "test_file_path": str(self.rootdir / file_path),
                "perf_stats": {"start": _now_ms(), "end": 0, "runtime": 0},
                "test_results": [],
            }
        return self._suites[file_path]

    # =========================================================================
    # Output
    # =========================================================================

    def build_summary(self) -> Dict[str, Any]:
        """Aggregate the recorded results into the exported document."""
        suites: List[Dict[str, Any]] = []
        totals = {"passed": 0, "failed": 0, "skipped": 0}
        suite_totals = {"passed": 0, "failed": 0, "pending": 0}

        for suite in self._suites.values():
            counts = {"passed": 0, "failed": 0, "skipped": 0}
            for case in suite["test_results"]:
                counts[case["status"]] += 1
            for status, count in counts.items():
                totals[status] += count

            if counts["failed"]:
                suite_totals["failed"] += 1
            elif counts["passed"]:
                suite_totals["passed"] += 1
            else:
                suite_totals["pending"] += 1

            perf = dict(suite["perf_stats"])
            perf["end"] = max(perf["end"], perf["start"])
            perf["runtime"] = perf["end"] - perf["start"]
            suites.append({
                "test_file_path": suite["test_file_path"],
                "num_passing_tests": counts["passed"],
                "num_failing_tests": counts["failed"],
                "num_pending_tests": counts["skipped"],
                "perf_stats": perf,
                "test_results": suite["test_results"],
            })

        return {
            "num_total_tests": sum(totals.values()),
            "num_passed_tests": totals["passed"],
            "num_failed_tests": totals["failed"],
            "num_pending_tests": totals["skipped"],
            "num_total_test_suites": len(suites),
            "num_passed_test_suites": suite_totals["passed"],
            "num_failed_test_suites": suite_totals["failed"],
            "num_pending_test_suites": suite_totals["pending"],
            "start_time": self.start_time,
            "success": totals["failed"] == 0,
            "test_results": suites,
        }

    def write(self) -> Path:
        """Write the summary JSON, creating parent directories as needed."""
        summary = self.build_summary()
        ensure_directory(self.output_path.parent)
        self.output_path.write_text(
            json.dumps(summary, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info(f"Test results exported to JSON file: {self.output_path}")
        return self.output_path


# ================================================================================
# Plugin Registration
# ================================================================================

def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("uitest-tools")
    group.addoption(
        "--result-json",
        action="store",
        dest="result_json",
        default=None,
        metavar="PATH",
        help="Export test results to a JSON file at PATH.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", f"{TITLE_MARKER}(title): title written to the exported test results"
    )
    # Only the controller process writes results under xdist
    if hasattr(config, "workerinput"):
        return

    output_path = config.getoption("result_json", default=None) or get_config("report.output_path")
    if not output_path:
        return

    config.pluginmanager.register(ResultExporter(output_path, config.rootpath), PLUGIN_NAME)


def pytest_unconfigure(config: pytest.Config) -> None:
    exporter = config.pluginmanager.get_plugin(PLUGIN_NAME)
    if exporter is not None:
        config.pluginmanager.unregister(exporter, PLUGIN_NAME)


__all__ = [
    "DEFAULT_OUTPUT_PATH",
    "ResultExporter",
]
