"""Case selection service."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

_TOKEN_PATTERN = re.compile(r"^(\d+)(?:-(\d+))?$")


class InvalidCaseSpec(Exception):
    """Raised when a case-spec token is not a case id or a valid range."""


def case_file_name(case_id: int) -> str:
    """Return the zero-padded file name used for a case (``0007.txt``)."""
    return f"{case_id:04d}.txt"


def split_case_spec(text: str | None) -> tuple[str, ...]:
    """Split a whitespace separated case-spec string into tokens."""
    if not text:
        return ()
    return tuple(text.split())


def select_cases(tokens: Sequence[str]) -> tuple[int, ...]:
    """Expand case-spec tokens into the ascending, duplicate-free case ids.

    Args:
      tokens: Single ids (``"3"``) or inclusive ranges (``"3-5"``).

    Returns:
      Sorted unique case ids covering the union of all tokens.

    Raises:
      InvalidCaseSpec: If any token is malformed or a range has ``lo > hi``.
    """
    selected: set[int] = set()
    for token in tokens:
        selected.update(_expand_token(token))
    return tuple(sorted(selected))


def detect_available_cases(in_dir: Path | str) -> tuple[int, ...]:
    """Return ids ``0..n-1`` for the longest run of existing input files."""
    directory = Path(in_dir)
    detected: list[int] = []
    while (directory / case_file_name(len(detected))).is_file():
        detected.append(len(detected))
    return tuple(detected)


def resolve_cases(tokens: Sequence[str], in_dir: Path | str) -> tuple[int, ...]:
    """Select the given tokens, or auto-detect input files when there are none."""
    if tokens:
        return select_cases(tokens)
    return detect_available_cases(in_dir)


def _expand_token(token: str) -> range:
    match = _TOKEN_PATTERN.match(token.strip())
    if match is None:
        raise InvalidCaseSpec(f"Invalid case spec token: '{token}'")
    low = int(match.group(1))
    high_text = match.group(2)
    if high_text is None:
        return range(low, low + 1)
    high = int(high_text)
    if low > high:
        raise InvalidCaseSpec(f"Invalid case range '{token}': start is greater than end.")
    return range(low, high + 1)
