"""Output extraction domain exports."""

from .extraction_outcomes import ScoreExtraction, ScoreStatus
from .extraction_rules import (
    ExtractionRules,
    InvalidPatternError,
    ScoreParseError,
    compile_single_group_pattern,
    extract_comments,
    extract_score,
    join_comments,
    parse_score_capture,
)

__all__ = [
    "ExtractionRules",
    "InvalidPatternError",
    "ScoreExtraction",
    "ScoreParseError",
    "ScoreStatus",
    "compile_single_group_pattern",
    "extract_comments",
    "extract_score",
    "join_comments",
    "parse_score_capture",
]
