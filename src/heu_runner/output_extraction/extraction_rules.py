"""Score and comment extraction from captured process output."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .extraction_outcomes import ScoreExtraction

_LOGGER = logging.getLogger(__name__)

DEFAULT_COMMENT_DELIMITER = "/"


class InvalidPatternError(ValueError):
    """Raised when an extraction pattern does not compile or has the wrong group count."""


class ScoreParseError(ValueError):
    """Raised when a matched score capture is not an unsigned integer."""


@dataclass(frozen=True)
class ExtractionRules:
    """Compiled score and comment patterns shared by all cases of a run."""

    score_pattern: re.Pattern[str]
    comment_pattern: re.Pattern[str]

    @staticmethod
    def compile(score_regex: str, comment_regex: str) -> ExtractionRules:
        return ExtractionRules(
            score_pattern=compile_single_group_pattern(score_regex, "score_regex"),
            comment_pattern=compile_single_group_pattern(comment_regex, "comment_regex"),
        )


def compile_single_group_pattern(pattern: str, label: str) -> re.Pattern[str]:
    """Compile ``pattern`` and require exactly one capture group."""
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(f"Invalid {label} '{pattern}': {exc}") from exc
    if compiled.groups != 1:
        raise InvalidPatternError(
            f"{label} '{pattern}' must contain exactly one capture group, "
            f"found {compiled.groups}."
        )
    return compiled


def parse_score_capture(text: str) -> int:
    """Parse a captured score as an unsigned integer."""
    stripped = text.strip()
    if not stripped.isascii() or not stripped.isdigit():
        raise ScoreParseError(f"Captured score '{text}' is not an unsigned integer.")
    return int(stripped)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def extract_score(
    text: str, pattern: re.Pattern[str], *, last_match: bool = False
) -> ScoreExtraction:
    """Parse the first line of ``text`` matching ``pattern`` into a score.

    With ``last_match`` the last matching line wins instead. No match yields a
    score-less extraction, not an error. A capture that is not an unsigned
    integer is logged and recorded as a parse error.
    """
    lines = split_lines(text)
    if last_match:
        lines.reverse()
    for line in lines:
        match = pattern.search(line)
        if match is None or match.group(1) is None:
            continue
        try:
            return ScoreExtraction.scored(parse_score_capture(match.group(1)))
        except ScoreParseError as exc:
            _LOGGER.warning("%s", exc)
            return ScoreExtraction.parse_error(str(exc))
    return ScoreExtraction.no_match()


def extract_comments(stderr: str, pattern: re.Pattern[str]) -> tuple[str, ...]:
    """Collect the capture of every stderr line matching ``pattern``, in line order."""
    comments: list[str] = []
    for line in split_lines(stderr):
        match = pattern.search(line)
        if match is None or match.group(1) is None:
            continue
        comments.append(match.group(1))
    return tuple(comments)


def join_comments(comments: tuple[str, ...], delimiter: str = DEFAULT_COMMENT_DELIMITER) -> str:
    return delimiter.join(comments)
