"""Run-once build step executed before any case."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from heu_runner.configuration.runtime_settings import BuildSettings
from heu_runner.process_running import ProcessOutcome, ProcessSpawnError, run_process

_LOGGER = logging.getLogger(__name__)

_STDERR_TAIL_LINES = 20


class BuildFailed(Exception):
    """Raised when the build command cannot start or exits non-zero."""


def run_build(
    settings: BuildSettings,
    *,
    cwd: Path | None = None,
    run_command: Callable[..., ProcessOutcome] | None = None,
) -> bool:
    """Run the build command when enabled.

    Returns:
      ``True`` when the build ran, ``False`` when it is disabled.

    Raises:
      BuildFailed: If the build cannot start or exits with a non-zero status.
    """
    if not settings.enable:
        _LOGGER.debug("build disabled, skipping")
        return False
    if settings.command is None:
        raise BuildFailed("build.command is not configured.")
    command_runner = run_command or run_process
    _LOGGER.info("building: %s", settings.command)
    try:
        outcome = command_runner(settings.command, cwd=cwd)
    except ProcessSpawnError as exc:
        raise BuildFailed(f"Build command could not start: {exc}") from exc
    if not outcome.succeeded:
        tail = "\n".join(outcome.stderr.splitlines()[-_STDERR_TAIL_LINES:])
        message = f"Build command failed with exit code {outcome.exit_status}: {settings.command}"
        if tail:
            message += f"\n{tail}"
        raise BuildFailed(message)
    _LOGGER.info("build finished in %.2fs", outcome.elapsed_seconds)
    return True
