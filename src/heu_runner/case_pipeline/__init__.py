"""Case pipeline domain exports."""

from .case_outcomes import CaseResult, CaseStatus, FailureReason
from .case_pipeline import CasePipeline, MissingEvaluationCommand

__all__ = [
    "CaseResult",
    "CaseStatus",
    "FailureReason",
    "CasePipeline",
    "MissingEvaluationCommand",
]
