"""Report aggregation and terminal rendering."""

from __future__ import annotations

from collections.abc import Iterable

from heu_runner.case_pipeline.case_outcomes import CaseResult, FailureReason
from heu_runner.output_extraction import ScoreStatus, join_comments

from .report_models import Report

_SCORE_WIDTH = 11

_STATUS_MARKERS = {
    ScoreStatus.SKIPPED: "",
    ScoreStatus.NO_MATCH: "NO_MATCH",
    ScoreStatus.PARSE_ERROR: "BAD_SCORE",
}

_FAILURE_MARKERS = {
    FailureReason.SOLVER_FAILED: "SOLVER_FAIL",
    FailureReason.EVALUATION_FAILED: "EVAL_FAIL",
}


def build_report(results: Iterable[CaseResult], *, clip_max_chars: int | None = None) -> Report:
    """Sort results by case id, total the present scores and pick the clipboard payload."""
    ordered = tuple(sorted(results, key=lambda result: result.case_id))
    total = sum(result.score for result in ordered if result.score is not None)
    last_output = ordered[-1].raw_output if ordered else None
    if last_output is not None and clip_max_chars is not None:
        last_output = last_output[:clip_max_chars]
    return Report(results=ordered, total_score=total, last_output=last_output)


def format_with_commas(value: int) -> str:
    return f"{value:,}"


def score_marker(result: CaseResult) -> str:
    """Text shown in the SCORE column: the score, or why there is none."""
    if result.failure_reason is not None:
        return _FAILURE_MARKERS[result.failure_reason]
    if result.score is not None:
        return format_with_commas(result.score)
    return _STATUS_MARKERS.get(result.score_status, "")


def render_case_line(result: CaseResult, comment_delimiter: str = "/") -> str:
    line = (
        f"{result.case_id:04d} SCORE[{score_marker(result):>{_SCORE_WIDTH}}] "
        f"ELAPSED[{result.elapsed_seconds:.2f}s] "
        f"CMTS[{join_comments(result.comments, comment_delimiter)}]"
    )
    if result.failure_detail:
        line += f" ERROR[{result.failure_detail}]"
    return line


def render_total(report: Report) -> str:
    return f"TOTAL={format_with_commas(report.total_score)}"
