"""Per-case pipeline: solve, evaluate, extract."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from heu_runner.configuration.runtime_settings import EvaluationMode, TestSettings
from heu_runner.output_extraction import ScoreStatus, extract_comments, extract_score
from heu_runner.process_running import ProcessOutcome, ProcessSpawnError, run_process

from .case_outcomes import CaseResult, FailureReason

_LOGGER = logging.getLogger(__name__)

ProcessRunner = Callable[..., ProcessOutcome]


class MissingEvaluationCommand(Exception):
    """Raised when the evaluation mode needs a command that is not configured."""


class CasePipeline:
    """Runs one case at a time from its input file to a ``CaseResult``.

    The pipeline only reads its settings, so one instance is shared by all
    workers of a run.
    """

    def __init__(self, settings: TestSettings, *, run_command: ProcessRunner | None = None) -> None:
        self._settings = settings
        self._run_command = run_command or run_process
        _require_evaluation_command(settings)

    @property
    def settings(self) -> TestSettings:
        return self._settings

    def run(self, case_id: int) -> CaseResult:
        """Run one case; failures are recorded in the result instead of raised."""
        try:
            if self._settings.evaluation_mode == EvaluationMode.TESTER:
                return self._run_with_tester(case_id)
            return self._run_with_solver(case_id)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            _LOGGER.warning("case %04d aborted: %s", case_id, exc)
            return CaseResult.failed(case_id, FailureReason.SOLVER_FAILED, str(exc))

    def _run_with_solver(self, case_id: int) -> CaseResult:
        settings = self._settings
        input_path, output_path = self._case_paths(case_id)
        try:
            solve = self._run_command(
                settings.bin,
                stdin_path=input_path,
                cwd=settings.working_dir,
                env=_input_env(input_path),
            )
        except ProcessSpawnError as exc:
            return CaseResult.failed(case_id, FailureReason.SOLVER_FAILED, str(exc))
        output_path.write_text(solve.stdout, encoding="utf-8")
        comments = extract_comments(solve.stderr, settings.extraction.comment_pattern)
        if not solve.succeeded:
            return CaseResult.failed(
                case_id,
                FailureReason.SOLVER_FAILED,
                _exit_detail("solver", solve),
                elapsed_seconds=solve.elapsed_seconds,
                comments=comments,
                raw_output=solve.stdout,
            )
        if settings.no_evaluate:
            return CaseResult.skipped(
                case_id,
                elapsed_seconds=solve.elapsed_seconds,
                comments=comments,
                raw_output=solve.stdout,
            )

        if settings.vis is None:
            raise MissingEvaluationCommand("test.vis is not configured.")
        try:
            evaluation = self._run_command(
                settings.vis,
                cwd=settings.working_dir,
                extra_args=(str(input_path), str(output_path)),
            )
        except ProcessSpawnError as exc:
            return self._evaluation_failed(case_id, str(exc), solve, comments)
        if not evaluation.succeeded:
            return self._evaluation_failed(
                case_id, _exit_detail("visualizer", evaluation), solve, comments
            )
        return CaseResult.done(
            case_id,
            elapsed_seconds=solve.elapsed_seconds,
            extraction=extract_score(evaluation.stdout, settings.extraction.score_pattern),
            comments=comments,
            raw_output=solve.stdout,
        )

    def _run_with_tester(self, case_id: int) -> CaseResult:
        settings = self._settings
        input_path, output_path = self._case_paths(case_id)
        if settings.tester is None:
            raise MissingEvaluationCommand("test.tester is not configured.")
        try:
            combined = self._run_command(
                settings.tester,
                stdin_path=input_path,
                cwd=settings.working_dir,
                extra_args=settings.bin.argv(),
                env=_input_env(input_path),
            )
        except ProcessSpawnError as exc:
            return CaseResult.failed(case_id, FailureReason.EVALUATION_FAILED, str(exc))
        output_path.write_text(combined.stdout, encoding="utf-8")
        comments = extract_comments(combined.stderr, settings.extraction.comment_pattern)
        if not combined.succeeded:
            return self._evaluation_failed(
                case_id, _exit_detail("tester", combined), combined, comments
            )
        if settings.no_evaluate:
            return CaseResult.skipped(
                case_id,
                elapsed_seconds=combined.elapsed_seconds,
                comments=comments,
                raw_output=combined.stdout,
            )
        extraction = extract_score(combined.stdout, settings.extraction.score_pattern)
        if extraction.status == ScoreStatus.NO_MATCH:
            extraction = extract_score(
                combined.stderr, settings.extraction.score_pattern, last_match=True
            )
        return CaseResult.done(
            case_id,
            elapsed_seconds=combined.elapsed_seconds,
            extraction=extraction,
            comments=comments,
            raw_output=combined.stdout,
        )

    def _case_paths(self, case_id: int) -> tuple[Path, Path]:
        input_path = self._settings.input_file(case_id).resolve()
        output_path = self._settings.output_file(case_id).resolve()
        return input_path, output_path

    @staticmethod
    def _evaluation_failed(
        case_id: int, detail: str, solve: ProcessOutcome, comments: tuple[str, ...]
    ) -> CaseResult:
        _LOGGER.warning("case %04d evaluation failed: %s", case_id, detail)
        return CaseResult.failed(
            case_id,
            FailureReason.EVALUATION_FAILED,
            detail,
            elapsed_seconds=solve.elapsed_seconds,
            comments=comments,
            raw_output=solve.stdout,
        )


def _require_evaluation_command(settings: TestSettings) -> None:
    mode = settings.evaluation_mode
    if mode == EvaluationMode.TESTER and settings.tester is None:
        raise MissingEvaluationCommand("test.tester is required when use_tester is true.")
    if mode == EvaluationMode.VISUALIZER and settings.vis is None:
        raise MissingEvaluationCommand(
            "test.vis is required unless no_evaluate or use_tester is set."
        )


def _input_env(input_path: Path) -> dict[str, str]:
    return {"INPUT_FILE": str(input_path), "IN_FILE": str(input_path)}


def _exit_detail(step: str, outcome: ProcessOutcome) -> str:
    detail = f"{step} exited with status {outcome.exit_status}"
    last_lines = [line for line in outcome.stderr.splitlines() if line.strip()]
    if last_lines:
        detail += f": {last_lines[-1].strip()}"
    return detail
