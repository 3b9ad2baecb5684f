"""External process invocation service."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .command_line import CommandLine

_LOGGER = logging.getLogger(__name__)


class ProcessSpawnError(Exception):
    """Raised when the program of a command cannot be located or started."""


@dataclass(frozen=True)
class ProcessOutcome:
    """Captured result of one finished process."""

    stdout: str
    stderr: str
    exit_status: int
    elapsed_seconds: float

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


def run_process(
    command: CommandLine,
    *,
    stdin_path: Path | str | None = None,
    cwd: Path | str | None = None,
    extra_args: Sequence[str] = (),
    env: Mapping[str, str] | None = None,
) -> ProcessOutcome:
    """Run one command to completion and capture its output as text.

    Args:
      command: Program and base arguments.
      stdin_path: File attached read-only as standard input; ``None`` gives an empty stdin.
      cwd: Working directory for the process; ``None`` keeps the current one.
      extra_args: Arguments appended after the command's own arguments.
      env: Variables added on top of the inherited environment.

    Returns:
      Captured stdout/stderr, the exit status and the wall time around the process.
      A non-zero exit status is reported, not raised.

    Raises:
      ProcessSpawnError: If the program cannot be started.
      OSError: If the stdin file cannot be opened.
    """
    argv = command.argv(*extra_args)
    process_env = {**os.environ, **env} if env else None
    _LOGGER.debug("running %s (stdin=%s, cwd=%s)", command, stdin_path, cwd)
    stdin_handle = open(stdin_path, "rb") if stdin_path is not None else None  # noqa: SIM115
    try:
        start = time.perf_counter()
        completed = subprocess.run(
            list(argv),
            stdin=stdin_handle if stdin_handle is not None else subprocess.DEVNULL,
            capture_output=True,
            cwd=cwd,
            env=process_env,
            check=False,
        )
        elapsed = time.perf_counter() - start
    except OSError as exc:
        raise ProcessSpawnError(f"Failed to start '{command.program}': {exc}") from exc
    finally:
        if stdin_handle is not None:
            stdin_handle.close()
    return ProcessOutcome(
        stdout=_decode(completed.stdout),
        stderr=_decode(completed.stderr),
        exit_status=completed.returncode,
        elapsed_seconds=elapsed,
    )


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")
