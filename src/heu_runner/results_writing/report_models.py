"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from heu_runner.case_pipeline.case_outcomes import CaseResult


@dataclass(frozen=True)
class Report:
    """Ordered case results of a run plus run-level aggregates."""

    results: tuple[CaseResult, ...]
    total_score: int
    last_output: str | None

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if not result.succeeded)


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    config_path: Path | None
    threads: int
    evaluation_mode: str
