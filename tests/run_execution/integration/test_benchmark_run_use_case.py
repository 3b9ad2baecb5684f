"""Benchmark run use-case tests running real scripts."""

from __future__ import annotations

import shlex
import sys
import textwrap
from pathlib import Path

import pytest
import yaml
from heu_runner.case_pipeline import CaseStatus, FailureReason
from heu_runner.output_extraction import ScoreStatus
from heu_runner.run_execution import RunExecutionError, RunRequest, execute_benchmark_run
from openpyxl import load_workbook

SOLVER = """
import sys

data = sys.stdin.read().strip()
print(f"# case {data}", file=sys.stderr)
if data == "fail":
    sys.exit(1)
print(f"answer {data}")
"""

VISUALIZER = """
import sys

with open(sys.argv[2], encoding="utf-8") as handle:
    value = int(handle.read().split()[1])
print(f"Score = {value * 100}")
"""

BUILD = """
import pathlib
import sys

marker = pathlib.Path(sys.argv[1])
marker.write_text(marker.read_text() + "built\\n" if marker.exists() else "built\\n")
"""


def _command(tmp_path: Path, name: str, body: str, *args: str) -> str:
    path = tmp_path / name
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return shlex.join([sys.executable, str(path), *args])


def _write_inputs(tmp_path: Path, contents: dict[int, str]) -> Path:
    in_dir = tmp_path / "in"
    in_dir.mkdir(exist_ok=True)
    for case_id, text in contents.items():
        (in_dir / f"{case_id:04d}.txt").write_text(text, encoding="utf-8")
    return in_dir


def _write_config(tmp_path: Path, **test_overrides) -> Path:
    test_section = {
        "bin": _command(tmp_path, "solver.py", SOLVER),
        "vis": _command(tmp_path, "vis.py", VISUALIZER),
        "threads": 2,
        "in_dir": str(tmp_path / "in"),
        "out_dir": str(tmp_path / "out"),
    }
    test_section.update(test_overrides)
    config = {
        "build": {
            "enable": True,
            "command": _command(tmp_path, "build.py", BUILD, str(tmp_path / "build.log")),
        },
        "test": test_section,
    }
    path = tmp_path / "heu.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def test_failing_case_is_reported_and_excluded_from_total(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1", 1: "2", 3: "fail", 4: "4", 5: "5"})
    config_path = _write_config(tmp_path)
    lines: list[str] = []

    outcome = execute_benchmark_run(
        RunRequest(config_path=str(config_path), case_tokens=("0", "1", "3-5")),
        on_case_line=lines.append,
    )

    report = outcome.report
    assert [result.case_id for result in report.results] == [0, 1, 3, 4, 5]
    failed = report.results[2]
    assert failed.status == CaseStatus.FAILED
    assert failed.failure_reason == FailureReason.SOLVER_FAILED
    assert failed.score is None
    assert report.total_score == 100 + 200 + 400 + 500
    assert report.last_output == "answer 5\n"
    assert [line[:4] for line in lines] == ["0000", "0001", "0003", "0004", "0005"]
    assert "SOLVER_FAIL" in lines[2]
    assert (tmp_path / "build.log").read_text(encoding="utf-8") == "built\n"


def test_no_evaluate_keeps_comments_and_elapsed_without_scores(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1", 1: "2"})
    config_path = _write_config(tmp_path, no_evaluate=True, vis=None)

    report = execute_benchmark_run(RunRequest(config_path=str(config_path))).report

    assert len(report.results) == 2
    assert report.total_score == 0
    for result in report.results:
        assert result.score is None
        assert result.score_status == ScoreStatus.SKIPPED
        assert result.comments == (f"case {result.case_id + 1}",)
        assert result.elapsed_seconds > 0


def test_request_overrides_take_precedence_over_configuration(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1", 1: "2", 2: "3"})
    config_path = _write_config(tmp_path, cases="0-2")

    report = execute_benchmark_run(
        RunRequest(config_path=str(config_path), case_tokens=("2",), threads=1, no_evaluate=True)
    ).report

    assert [result.case_id for result in report.results] == [2]
    assert report.results[0].score_status == ScoreStatus.SKIPPED


def test_auto_detects_contiguous_cases_when_none_are_given(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1", 1: "2", 3: "4"})
    config_path = _write_config(tmp_path)

    report = execute_benchmark_run(RunRequest(config_path=str(config_path))).report

    assert [result.case_id for result in report.results] == [0, 1]
    assert report.total_score == 300


def test_results_workbook_is_written_when_requested(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1", 1: "fail"})
    config_path = _write_config(tmp_path)
    results_path = tmp_path / "reports" / "results.xlsx"

    outcome = execute_benchmark_run(
        RunRequest(config_path=str(config_path), results_path=str(results_path))
    )

    assert outcome.results_path == results_path.resolve()
    workbook = load_workbook(results_path)
    rows = list(workbook["Cases"].iter_rows(values_only=True))
    assert rows[1][:3] == ("0000", "done", 100)
    assert rows[2][:3] == ("0001", "failed", None)


def test_invalid_case_spec_aborts_before_build(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1"})
    config_path = _write_config(tmp_path)

    with pytest.raises(RunExecutionError, match="Invalid case"):
        execute_benchmark_run(RunRequest(config_path=str(config_path), case_tokens=("5-3",)))
    assert not (tmp_path / "build.log").exists()
    assert not (tmp_path / "out").exists()


def test_build_failure_aborts_before_any_case(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1"})
    config_path = _write_config(tmp_path)
    config = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    config["build"]["command"] = shlex.join([sys.executable, "-c", "import sys; sys.exit(2)"])
    config_path.write_text(yaml.safe_dump(config), encoding="utf-8")

    with pytest.raises(RunExecutionError, match="Build command failed"):
        execute_benchmark_run(RunRequest(config_path=str(config_path)))
    assert not (tmp_path / "out").exists()


def test_missing_visualizer_command_aborts(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1"})
    config_path = _write_config(tmp_path, vis=None)

    with pytest.raises(RunExecutionError, match="test.vis is required"):
        execute_benchmark_run(RunRequest(config_path=str(config_path)))


def test_missing_configuration_file_aborts(tmp_path: Path) -> None:
    with pytest.raises(RunExecutionError, match="not found"):
        execute_benchmark_run(RunRequest(config_path=str(tmp_path / "missing.yaml")))


def test_build_runs_in_configured_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_inputs(tmp_path, {0: "1"})
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    solver = """
    import pathlib
    import sys

    print(f"# artifact {pathlib.Path('artifact').exists()}", file=sys.stderr)
    print("answer 1")
    """
    config_path = _write_config(
        tmp_path,
        bin=_command(tmp_path, "artifact_solver.py", solver),
        working_dir=str(work_dir),
    )
    config = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    config["build"]["command"] = _command(tmp_path, "build.py", BUILD, "artifact")
    config_path.write_text(yaml.safe_dump(config), encoding="utf-8")

    report = execute_benchmark_run(RunRequest(config_path=str(config_path))).report

    assert (work_dir / "artifact").exists()
    assert not (elsewhere / "artifact").exists()
    assert report.results[0].comments == ("artifact True",)


def test_unwritable_output_directory_aborts_before_cases(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1"})
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    config_path = _write_config(tmp_path, out_dir=str(blocker / "out"))

    with pytest.raises(RunExecutionError, match="Cannot create output directory"):
        execute_benchmark_run(RunRequest(config_path=str(config_path)))


def test_unwritable_results_workbook_keeps_report(tmp_path: Path) -> None:
    _write_inputs(tmp_path, {0: "1", 1: "2"})
    config_path = _write_config(tmp_path)
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    outcome = execute_benchmark_run(
        RunRequest(config_path=str(config_path), results_path=str(blocker / "results.xlsx"))
    )

    assert outcome.report.total_score == 300
    assert outcome.results_path is None
    assert outcome.results_error is not None
    assert "Cannot write results workbook" in outcome.results_error
