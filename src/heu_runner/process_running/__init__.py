"""Process running domain exports."""

from .command_line import CommandLine, CommandLineError
from .process_runner import ProcessOutcome, ProcessSpawnError, run_process

__all__ = [
    "CommandLine",
    "CommandLineError",
    "ProcessOutcome",
    "ProcessSpawnError",
    "run_process",
]
