"""Bounded-concurrency case scheduler."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from heu_runner.case_pipeline import CaseResult, FailureReason

_LOGGER = logging.getLogger(__name__)

CaseExecutor = Callable[[int], CaseResult]
ResultCallback = Callable[[CaseResult], None]


class _InOrderRelease:  # pylint: disable=too-few-public-methods
    """Hands results to a callback in ascending case order as the prefix completes."""

    def __init__(self, ordered_ids: list[int], callback: ResultCallback | None) -> None:
        self._ordered_ids = ordered_ids
        self._callback = callback
        self._pending: dict[int, CaseResult] = {}
        self._next_index = 0

    def push(self, result: CaseResult) -> None:
        if self._callback is None:
            return
        self._pending[result.case_id] = result
        while self._next_index < len(self._ordered_ids):
            case_id = self._ordered_ids[self._next_index]
            if case_id not in self._pending:
                break
            self._callback(self._pending.pop(case_id))
            self._next_index += 1


def run_cases(
    case_ids: Iterable[int],
    execute_case: CaseExecutor,
    *,
    threads: int,
    on_result: ResultCallback | None = None,
) -> list[CaseResult]:
    """Run every case with at most ``threads`` cases in flight.

    A failing case never cancels its siblings. Results are returned, and
    passed to ``on_result``, in ascending case id order.
    """
    ordered_ids = sorted(set(case_ids))
    release = _InOrderRelease(ordered_ids, on_result)
    results: dict[int, CaseResult] = {}
    with ThreadPoolExecutor(max_workers=max(1, threads)) as executor:
        futures = {executor.submit(execute_case, case_id): case_id for case_id in ordered_ids}
        for future in as_completed(futures):
            case_id = futures[future]
            try:
                result = future.result()
            except Exception as exc:  # pylint: disable=broad-exception-caught
                _LOGGER.warning("case %04d raised: %s", case_id, exc)
                result = CaseResult.failed(case_id, FailureReason.SOLVER_FAILED, str(exc))
            results[case_id] = result
            release.push(result)
    return [results[case_id] for case_id in ordered_ids]
