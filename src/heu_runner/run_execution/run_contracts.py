"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from heu_runner.results_writing.report_models import Report


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one benchmark run.

    Fields left as ``None``/empty keep the configuration file's value.
    """

    config_path: str
    case_tokens: tuple[str, ...] = ()
    threads: int | None = None
    no_evaluate: bool = False
    use_tester: bool = False
    results_path: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run.

    ``results_error`` is set when the cases ran but the results workbook could
    not be written.
    """

    report: Report
    results_path: Path | None
    results_error: str | None = None
