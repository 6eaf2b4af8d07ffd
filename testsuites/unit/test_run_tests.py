import json
import sys
from types import SimpleNamespace

import run_tests
from run_tests import TestRunner, build_parser, main


def _write_results(path):
    path.write_text(
        json.dumps({
            "test_results": [{
                "test_file_path": "/repo/testsuites/unit/test_a.py",
                "test_results": [
                    {"title": "amy#1 first", "status": "passed"},
                    {"title": "amy#2 second", "status": "failed"},
                    {"title": "ben#1 other", "status": "passed"},
                ],
            }],
        }),
        encoding="utf-8",
    )
    return path


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.suite == "all"
    assert args.result_json is None
    assert args.authors is None
    assert args.summary_only is False


def test_build_pytest_command(tmp_path):
    result_json = tmp_path / "results.json"

    cmd = TestRunner(suite="unit", result_json=str(result_json)).build_pytest_command()

    assert cmd[:3] == [sys.executable, "-m", "pytest"]
    assert "testsuites/unit" in cmd
    assert cmd[cmd.index("--result-json") + 1] == str(result_json)
    assert cmd[-1] == "-q"
    assert TestRunner(suite="ui", verbose=True).build_pytest_command()[-1] == "-v"


def test_relative_result_path_is_under_repo_root():
    runner = TestRunner(result_json="testResult/out.json")
    assert runner.result_json == runner.root_dir / "testResult" / "out.json"


def test_summary_only(tmp_path, capsys):
    path = _write_results(tmp_path / "results.json")

    assert main(["--summary-only", "--result-json", str(path), "--authors", "amy"]) == 0

    out = capsys.readouterr().out
    assert "amy" in out
    assert "ben" not in out
    assert "50.0" in out


def test_summary_only_missing_file(tmp_path):
    assert main(["--summary-only", "--result-json", str(tmp_path / "missing.json")]) == 1


def test_run_mirrors_pytest_exit_code(tmp_path, monkeypatch, capsys):
    path = tmp_path / "results.json"
    calls = []

    def fake_run(cmd, cwd):
        calls.append(cmd)
        _write_results(path)
        return SimpleNamespace(returncode=1)

    monkeypatch.setattr(run_tests.subprocess, "run", fake_run)

    assert TestRunner(suite="unit", result_json=str(path)).run() == 1
    assert len(calls) == 1
    assert "ben" in capsys.readouterr().out


def test_runner_root_is_repo_root(project_root):
    assert TestRunner().root_dir == project_root
