"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from heu_runner.case_selection import case_file_name
from heu_runner.output_extraction import ExtractionRules
from heu_runner.process_running import CommandLine


class EvaluationMode(str, Enum):
    """How a case's score is produced."""

    SKIP = "skip"
    VISUALIZER = "visualizer"
    TESTER = "tester"


@dataclass(frozen=True)
class BuildSettings:
    """Run-once build step settings."""

    enable: bool
    command: CommandLine | None


@dataclass(frozen=True)
class TestSettings:  # pylint: disable=too-many-instance-attributes
    """Per-case execution settings."""

    __test__ = False

    bin: CommandLine
    cases: tuple[str, ...]
    threads: int
    no_evaluate: bool
    use_tester: bool
    in_dir: Path
    out_dir: Path
    vis: CommandLine | None
    tester: CommandLine | None
    extraction: ExtractionRules
    comment_delimiter: str = "/"
    working_dir: Path | None = None
    clip_max_chars: int | None = None

    @property
    def evaluation_mode(self) -> EvaluationMode:
        if self.use_tester:
            return EvaluationMode.TESTER
        if self.no_evaluate:
            return EvaluationMode.SKIP
        return EvaluationMode.VISUALIZER

    def input_file(self, case_id: int) -> Path:
        return self.in_dir / case_file_name(case_id)

    def output_file(self, case_id: int) -> Path:
        return self.out_dir / case_file_name(case_id)


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate, read-only for the whole run."""

    path: Path | None
    build: BuildSettings
    test: TestSettings
