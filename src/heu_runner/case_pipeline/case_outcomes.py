"""Case pipeline entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from heu_runner.output_extraction import ScoreExtraction, ScoreStatus


class CaseStatus(str, Enum):
    """Terminal state of one case pipeline."""

    DONE = "done"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Pipeline step that made a case fail."""

    SOLVER_FAILED = "solver_failed"
    EVALUATION_FAILED = "evaluation_failed"


@dataclass(frozen=True)
class CaseResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of running one case through the pipeline."""

    case_id: int
    status: CaseStatus
    elapsed_seconds: float
    score: int | None
    score_status: ScoreStatus
    comments: tuple[str, ...]
    raw_output: str
    failure_reason: FailureReason | None = None
    failure_detail: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == CaseStatus.DONE

    @staticmethod
    def done(
        case_id: int,
        *,
        elapsed_seconds: float,
        extraction: ScoreExtraction,
        comments: tuple[str, ...],
        raw_output: str,
    ) -> CaseResult:
        return CaseResult(
            case_id=case_id,
            status=CaseStatus.DONE,
            elapsed_seconds=elapsed_seconds,
            score=extraction.score,
            score_status=extraction.status,
            comments=comments,
            raw_output=raw_output,
            failure_detail=extraction.detail,
        )

    @staticmethod
    def skipped(
        case_id: int, *, elapsed_seconds: float, comments: tuple[str, ...], raw_output: str
    ) -> CaseResult:
        return CaseResult(
            case_id=case_id,
            status=CaseStatus.DONE,
            elapsed_seconds=elapsed_seconds,
            score=None,
            score_status=ScoreStatus.SKIPPED,
            comments=comments,
            raw_output=raw_output,
        )

    @staticmethod
    def failed(
        case_id: int,
        reason: FailureReason,
        detail: str,
        *,
        elapsed_seconds: float = 0.0,
        comments: tuple[str, ...] = (),
        raw_output: str = "",
    ) -> CaseResult:
        return CaseResult(
            case_id=case_id,
            status=CaseStatus.FAILED,
            elapsed_seconds=elapsed_seconds,
            score=None,
            score_status=ScoreStatus.UNAVAILABLE,
            comments=comments,
            raw_output=raw_output,
            failure_reason=reason,
            failure_detail=detail,
        )
