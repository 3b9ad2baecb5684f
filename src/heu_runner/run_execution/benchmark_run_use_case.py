"""Benchmark run use-case service."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from heu_runner.case_pipeline import CasePipeline, CaseResult, MissingEvaluationCommand
from heu_runner.case_selection import InvalidCaseSpec, resolve_cases
from heu_runner.configuration import Configuration, ConfigurationError, load_configuration
from heu_runner.configuration.runtime_settings import TestSettings
from heu_runner.process_running import ProcessOutcome
from heu_runner.results_writing import (
    RunMetadata,
    build_report,
    render_case_line,
    write_results_workbook,
)

from .build_step import BuildFailed, run_build
from .run_contracts import RunOutcome, RunRequest
from .scheduler import ResultCallback, run_cases

_LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run cannot start or its build fails."""


def execute_benchmark_run(
    request: RunRequest,
    *,
    on_case_line: Callable[[str], None] | None = None,
    run_command: Callable[..., ProcessOutcome] | None = None,
) -> RunOutcome:
    """Execute one benchmark run and return its report.

    Everything that can abort the run (configuration, case selection, missing
    evaluation command, build) happens before the first case starts. After
    that, case failures only show up in the report.
    """
    configuration = _load_configuration(request)
    settings = configuration.test
    try:
        case_ids = resolve_cases(request.case_tokens or settings.cases, settings.in_dir)
        pipeline = CasePipeline(settings, run_command=run_command)
    except (InvalidCaseSpec, MissingEvaluationCommand) as exc:
        raise RunExecutionError(str(exc)) from exc

    try:
        run_build(configuration.build, cwd=settings.working_dir, run_command=run_command)
    except BuildFailed as exc:
        raise RunExecutionError(str(exc)) from exc

    if not case_ids:
        _LOGGER.warning("no cases selected (no input files under %s)", settings.in_dir)
    try:
        settings.out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RunExecutionError(
            f"Cannot create output directory {settings.out_dir}: {exc}"
        ) from exc
    run_start = datetime.now(UTC)
    results = run_cases(
        case_ids,
        pipeline.run,
        threads=settings.threads,
        on_result=_line_emitter(on_case_line, settings.comment_delimiter),
    )
    report = build_report(results, clip_max_chars=settings.clip_max_chars)

    results_path = None
    results_error = None
    if request.results_path:
        try:
            results_path = write_results_workbook(
                report,
                request.results_path,
                RunMetadata(
                    run_start=run_start,
                    config_path=configuration.path,
                    threads=settings.threads,
                    evaluation_mode=settings.evaluation_mode.value,
                ),
                comment_delimiter=settings.comment_delimiter,
            )
        except OSError as exc:
            results_error = f"Cannot write results workbook {request.results_path}: {exc}"
            _LOGGER.error("%s", results_error)
    return RunOutcome(report=report, results_path=results_path, results_error=results_error)


def _load_configuration(request: RunRequest) -> Configuration:
    try:
        configuration = load_configuration(request.config_path)
    except (ConfigurationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return dataclasses.replace(configuration, test=_apply_overrides(configuration.test, request))


def _apply_overrides(settings: TestSettings, request: RunRequest) -> TestSettings:
    if request.threads is not None and request.threads < 1:
        raise RunExecutionError("threads must be greater than zero.")
    return dataclasses.replace(
        settings,
        threads=request.threads or settings.threads,
        no_evaluate=settings.no_evaluate or request.no_evaluate,
        use_tester=settings.use_tester or request.use_tester,
    )


def _line_emitter(
    on_case_line: Callable[[str], None] | None, comment_delimiter: str
) -> ResultCallback | None:
    if on_case_line is None:
        return None

    def emit(result: CaseResult) -> None:
        on_case_line(render_case_line(result, comment_delimiter))

    return emit
