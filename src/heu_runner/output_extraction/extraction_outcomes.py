"""Output extraction entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ScoreStatus(str, Enum):
    """Why a case does or does not carry a score."""

    SCORED = "scored"
    SKIPPED = "skipped"
    NO_MATCH = "no_match"
    PARSE_ERROR = "parse_error"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ScoreExtraction:
    """Outcome of applying the score pattern to scoring text."""

    score: int | None
    status: ScoreStatus
    detail: str | None = None

    @staticmethod
    def scored(score: int) -> ScoreExtraction:
        return ScoreExtraction(score=score, status=ScoreStatus.SCORED)

    @staticmethod
    def no_match() -> ScoreExtraction:
        return ScoreExtraction(score=None, status=ScoreStatus.NO_MATCH)

    @staticmethod
    def parse_error(detail: str) -> ScoreExtraction:
        return ScoreExtraction(score=None, status=ScoreStatus.PARSE_ERROR, detail=detail)
