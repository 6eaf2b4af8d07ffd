"""
================================================================================
Test Result Parser
================================================================================

Reads the JSON written by the result exporter and turns it into per-author
statistics.

Test titles follow the convention ``<author>#<number>【<title>】<rest>``,
e.g. ``alice#12【Login】valid credentials reach dashboard``. The bracketed
title is optional; tests whose title does not follow the convention are
left out of the statistics.

Example:
    cases = parse_test_results("testResult/test-results.json")
    stats = count_test_cases(cases, target_authors=["alice", "bob"])
    print(format_statistics(stats))

================================================================================
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from loguru import logger

from uitest_tools.common import get_config, read_file, truncate_file_path

from .result_exporter import DEFAULT_OUTPUT_PATH


TITLE_PATTERN = re.compile(
    r"^(?P<author>[^\s#]+)#(?P<test_number>\d+)(?:\s*【(?P<test_title>.+?)】)?(?P<rest_of_text>.*)$"
)

ALL_AUTHORS = "all"


class ReportFormatError(Exception):
    """Raised when a result file is not valid exporter output."""
    pass


# ================================================================================
# Data Models
# ================================================================================

@dataclass
class CaseResult:
    """One test as written by the exporter."""
    title: str
    status: str
    duration: float = 0.0
    ancestor_titles: List[str] = field(default_factory=list)
    failure_messages: List[str] = field(default_factory=list)
    test_file_path: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], test_file_path: str = "") -> "CaseResult":
        return cls(
            title=data["title"],
            status=data["status"],
            duration=float(data.get("duration") or 0.0),
            ancestor_titles=list(data.get("ancestor_titles") or []),
            failure_messages=list(data.get("failure_messages") or []),
            test_file_path=test_file_path,
        )


@dataclass
class SuiteResult:
    """All tests of one test file."""
    test_file_path: str
    test_results: List[CaseResult] = field(default_factory=list)
    num_passing_tests: int = 0
    num_failing_tests: int = 0
    num_pending_tests: int = 0
    perf_stats: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SuiteResult":
        path = data["test_file_path"]
        return cls(
            test_file_path=path,
            test_results=[CaseResult.from_dict(case, path) for case in data.get("test_results", [])],
            num_passing_tests=int(data.get("num_passing_tests", 0)),
            num_failing_tests=int(data.get("num_failing_tests", 0)),
            num_pending_tests=int(data.get("num_pending_tests", 0)),
            perf_stats=dict(data.get("perf_stats") or {}),
        )


@dataclass
class RunSummary:
    """Aggregated result of a whole run."""
    num_total_tests: int = 0
    num_passed_tests: int = 0
    num_failed_tests: int = 0
    num_pending_tests: int = 0
    num_total_test_suites: int = 0
    num_passed_test_suites: int = 0
    num_failed_test_suites: int = 0
    success: bool = True
    test_results: List[SuiteResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunSummary":
        return cls(
            num_total_tests=int(data.get("num_total_tests", 0)),
            num_passed_tests=int(data.get("num_passed_tests", 0)),
            num_failed_tests=int(data.get("num_failed_tests", 0)),
            num_pending_tests=int(data.get("num_pending_tests", 0)),
            num_total_test_suites=int(data.get("num_total_test_suites", 0)),
            num_passed_test_suites=int(data.get("num_passed_test_suites", 0)),
            num_failed_test_suites=int(data.get("num_failed_test_suites", 0)),
            success=bool(data.get("success", True)),
            test_results=[SuiteResult.from_dict(suite) for suite in data.get("test_results", [])],
        )


@dataclass
class ParsedCase:
    """A test whose title follows the author#number convention."""
    author: str
    test_number: str
    test_title: Optional[str]
    rest_of_text: str
    file_path: str
    status: str
    duration: float
    ancestor_titles: List[str]


@dataclass
class CaseStatistics:
    """Outcome counts for one author (or all authors)."""
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    total: int = 0
    pass_rate: float = 0.0

    def add(self, status: str) -> None:
        self.total += 1
        if status == "passed":
            self.passed += 1
        elif status == "failed":
            self.failed += 1
        elif status in ("skipped", "pending"):
            self.skipped += 1

    def update_pass_rate(self) -> None:
        self.pass_rate = round(self.passed / self.total * 100, 1) if self.total else 0.0


# ================================================================================
# Parsing
# ================================================================================

def parse_test_case(case: CaseResult) -> Optional[ParsedCase]:
    """
    Parse a test title of the form ``author#number【title】rest``.

    Returns:
        ParsedCase, or None when the title does not follow the convention
    """
    match = TITLE_PATTERN.match(case.title)
    if not match:
        return None

    return ParsedCase(
        author=match.group("author"),
        test_number=match.group("test_number"),
        test_title=match.group("test_title"),
        rest_of_text=match.group("rest_of_text"),
        file_path=case.test_file_path,
        status=case.status,
        duration=case.duration,
        ancestor_titles=case.ancestor_titles,
    )


def load_run_summary(file_path: Union[str, Path]) -> RunSummary:
    """
    Load a result file written by the exporter.

    Raises:
        FileNotFoundError: The file does not exist
        ReportFormatError: The file is not valid JSON or misses required fields
    """
    content = read_file(file_path)
    if content is None:
        raise FileNotFoundError(f"Result file not found: {file_path}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ReportFormatError(f"Invalid JSON in result file {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ReportFormatError(f"Result file {file_path} must contain a JSON object")

    try:
        return RunSummary.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ReportFormatError(f"Malformed result file {file_path}: {e!r}") from e


def parse_test_results(
    file_path: Optional[Union[str, Path]] = None,
    path_keyword: str = os.sep,
) -> List[ParsedCase]:
    """
    Load a result file and parse every test that follows the title convention.

    Args:
        file_path: Result file, defaults to the configured report output path
        path_keyword: Test file paths are shortened to what follows the last
            occurrence of this keyword (the file name for the default).
            Paths without the keyword are kept as they are.

    Returns:
        Parsed test cases, in file order
    """
    file_path = file_path or get_config("report.output_path", str(DEFAULT_OUTPUT_PATH))
    summary = load_run_summary(file_path)

    parsed: List[ParsedCase] = []
    skipped = 0
    for suite in summary.test_results:
        short_path = suite.test_file_path
        if path_keyword and path_keyword in short_path:
            short_path = truncate_file_path(short_path, path_keyword)
        for case in suite.test_results:
            case.test_file_path = short_path
            result = parse_test_case(case)
            if result is None:
                skipped += 1
                continue
            parsed.append(result)

    logger.debug(
        f"Parsed {len(parsed)} test case(s) from {file_path}, "
        f"{skipped} without author#number title"
    )
    return parsed


# ================================================================================
# Statistics
# ================================================================================

def count_test_cases(
    test_cases: Iterable[ParsedCase],
    target_authors: Optional[Sequence[str]] = None,
) -> Dict[str, CaseStatistics]:
    """
    Count outcomes per author, plus an ``"all"`` entry summing every author.

    Args:
        test_cases: Parsed test cases
        target_authors: Only count these authors (all authors when None)

    Returns:
        Author -> statistics, pass rates as percentages with one decimal
    """
    author_stats: Dict[str, CaseStatistics] = {}

    for case in test_cases:
        if target_authors is not None and case.author not in target_authors:
            continue
        author_stats.setdefault(case.author, CaseStatistics()).add(case.status)

    total = CaseStatistics()
    for stats in author_stats.values():
        total.passed += stats.passed
        total.failed += stats.failed
        total.skipped += stats.skipped
        total.total += stats.total
    author_stats[ALL_AUTHORS] = total

    for stats in author_stats.values():
        stats.update_pass_rate()

    return author_stats


def format_statistics(stats: Dict[str, CaseStatistics]) -> str:
    """Render statistics as a fixed-width table, the ``all`` row last."""
    header = f"{'Author':<16}{'Total':>7}{'Passed':>8}{'Failed':>8}{'Skipped':>9}{'Pass %':>8}"
    lines = [header, "-" * len(header)]

    authors = sorted(name for name in stats if name != ALL_AUTHORS)
    if ALL_AUTHORS in stats:
        authors.append(ALL_AUTHORS)

    for author in authors:
        s = stats[author]
        lines.append(
            f"{author:<16}{s.total:>7}{s.passed:>8}{s.failed:>8}{s.skipped:>9}{s.pass_rate:>8.1f}"
        )
    return "\n".join(lines)


__all__ = [
    "ReportFormatError",
    "CaseResult",
    "SuiteResult",
    "RunSummary",
    "ParsedCase",
    "CaseStatistics",
    "parse_test_case",
    "load_run_summary",
    "parse_test_results",
    "count_test_cases",
    "format_statistics",
]
