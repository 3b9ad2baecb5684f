"""Run execution domain exports."""

from .benchmark_run_use_case import RunExecutionError, execute_benchmark_run
from .build_step import BuildFailed, run_build
from .run_contracts import RunOutcome, RunRequest
from .scheduler import run_cases

__all__ = [
    "BuildFailed",
    "RunExecutionError",
    "RunOutcome",
    "RunRequest",
    "execute_benchmark_run",
    "run_build",
    "run_cases",
]
