import json
from types import SimpleNamespace

import pytest

from uitest_tools.report_tools import ResultExporter, parse_test_results


def _report(nodeid, when="call", outcome="passed", duration=0.25, longrepr="", properties=()):
    return SimpleNamespace(
        nodeid=nodeid,
        when=when,
        passed=outcome == "passed",
        skipped=outcome == "skipped",
        failed=outcome == "failed",
        duration=duration,
        longreprtext=longrepr,
        user_properties=list(properties),
    )


@pytest.fixture
def exporter(tmp_path):
    return ResultExporter(tmp_path / "out" / "test-results.json", rootdir="/repo")


def test_record_case_fields(exporter):
    case = exporter.record(_report("testsuites/unit/test_a.py::TestLogin::test_ok", duration=0.0125))

    assert case == {
        "title": "test_ok",
        "ancestor_titles": ["TestLogin"],
        "duration": 12.5,
        "status": "passed",
        "failure_messages": [],
    }


def test_title_marker_overrides_name(exporter):
    case = exporter.record(
        _report("test_a.py::test_ok", properties=[("case_title", "alice#3【Login】works")])
    )
    assert case["title"] == "alice#3【Login】works"


def test_logreport_phases(exporter):
    exporter.pytest_runtest_logreport(_report("test_a.py::test_ok", when="setup"))
    exporter.pytest_runtest_logreport(_report("test_a.py::test_ok"))
    exporter.pytest_runtest_logreport(_report("test_a.py::test_ok", when="teardown"))
    exporter.pytest_runtest_logreport(_report("test_a.py::test_skip", when="setup", outcome="skipped"))
    exporter.pytest_runtest_logreport(
        _report("test_a.py::test_bad_fixture", when="teardown", outcome="failed", longrepr="boom")
    )

    cases = exporter.build_summary()["test_results"][0]["test_results"]
    assert [(c["title"], c["status"]) for c in cases] == [
        ("test_ok", "passed"),
        ("test_skip", "skipped"),
        ("test_bad_fixture", "failed"),
    ]


def test_teardown_failure_marks_recorded_case(exporter):
    exporter.pytest_runtest_logreport(_report("test_a.py::test_ok"))
    exporter.pytest_runtest_logreport(
        _report("test_a.py::test_ok", when="teardown", outcome="failed", longrepr="cleanup failed")
    )

    (case,) = exporter.build_summary()["test_results"][0]["test_results"]
    assert case["status"] == "failed"
    assert case["failure_messages"] == ["cleanup failed"]


def test_summary_counts(exporter):
    exporter.record(_report("a/test_one.py::test_1"))
    exporter.record(_report("a/test_one.py::test_2", outcome="failed", longrepr="AssertionError"))
    exporter.record(_report("a/test_two.py::test_3"))
    exporter.record(_report("a/test_three.py::test_4", outcome="skipped"))

    summary = exporter.build_summary()

    assert summary["num_total_tests"] == 4
    assert summary["num_passed_tests"] == 2
    assert summary["num_failed_tests"] == 1
    assert summary["num_pending_tests"] == 1
    assert summary["num_total_test_suites"] == 3
    assert summary["num_failed_test_suites"] == 1
    assert summary["num_passed_test_suites"] == 1
    assert summary["num_pending_test_suites"] == 1
    assert summary["success"] is False

    first = summary["test_results"][0]
    assert first["test_file_path"].replace("\\", "/") == "/repo/a/test_one.py"
    assert first["num_passing_tests"] == 1
    assert first["num_failing_tests"] == 1
    assert first["test_results"][1]["failure_messages"] == ["AssertionError"]
    perf = first["perf_stats"]
    assert perf["runtime"] == perf["end"] - perf["start"] >= 0


def test_written_file_is_parseable(exporter):
    exporter.record(_report("testsuites/unit/test_a.py::test_x", properties=[("case_title", "amy#1 x")]))

    path = exporter.write()

    assert json.loads(path.read_text(encoding="utf-8"))["success"] is True
    (case,) = parse_test_results(path, path_keyword="testsuites/")
    assert case.author == "amy"
    assert case.file_path.replace("\\", "/") == "unit/test_a.py"


def test_runtest_setup_collects_marker(exporter):
    marker = SimpleNamespace(args=("bob#9 title",))
    item = SimpleNamespace(
        get_closest_marker=lambda name: marker if name == "case_title" else None,
        user_properties=[],
    )

    exporter.pytest_runtest_setup(item)

    assert item.user_properties == [("case_title", "bob#9 title")]
