"""Case scheduler tests."""

from __future__ import annotations

import random
import threading
import time

import pytest
from heu_runner.case_pipeline import CaseResult, CaseStatus, FailureReason
from heu_runner.output_extraction import ScoreExtraction
from heu_runner.run_execution import run_cases


def _scored(case_id: int) -> CaseResult:
    return CaseResult.done(
        case_id,
        elapsed_seconds=0.0,
        extraction=ScoreExtraction.scored(case_id * 10),
        comments=(),
        raw_output=str(case_id),
    )


@pytest.mark.parametrize("threads", [1, 2, 4, 16])
def test_run_cases_returns_every_case_in_ascending_order(threads: int) -> None:
    case_ids = [5, 3, 9, 0, 1, 7, 2]
    rng = random.Random(threads)
    delays = {case_id: rng.uniform(0, 0.02) for case_id in case_ids}

    def _execute(case_id: int) -> CaseResult:
        time.sleep(delays[case_id])
        return _scored(case_id)

    results = run_cases(case_ids, _execute, threads=threads)

    assert [result.case_id for result in results] == sorted(case_ids)


def test_run_cases_never_exceeds_thread_limit() -> None:
    lock = threading.Lock()
    running = 0
    peak = 0

    def _execute(case_id: int) -> CaseResult:
        nonlocal running, peak
        with lock:
            running += 1
            peak = max(peak, running)
        time.sleep(0.02)
        with lock:
            running -= 1
        return _scored(case_id)

    results = run_cases(range(10), _execute, threads=3)

    assert len(results) == 10
    assert 1 <= peak <= 3


def test_run_cases_streams_results_in_case_order_despite_completion_order() -> None:
    released: list[int] = []

    def _execute(case_id: int) -> CaseResult:
        # Later cases finish first.
        time.sleep(0.01 * (4 - case_id))
        return _scored(case_id)

    run_cases(
        range(5), _execute, threads=5, on_result=lambda result: released.append(result.case_id)
    )

    assert released == [0, 1, 2, 3, 4]


def test_run_cases_contains_a_raising_case() -> None:
    def _execute(case_id: int) -> CaseResult:
        if case_id == 2:
            raise RuntimeError("worker crashed")
        return _scored(case_id)

    results = run_cases(range(4), _execute, threads=2)

    assert [result.status for result in results] == [
        CaseStatus.DONE,
        CaseStatus.DONE,
        CaseStatus.FAILED,
        CaseStatus.DONE,
    ]
    assert results[2].failure_reason == FailureReason.SOLVER_FAILED
    assert results[2].failure_detail == "worker crashed"


def test_run_cases_with_no_cases_returns_empty_list() -> None:
    assert run_cases([], _scored, threads=4) == []
