"""Command line value type."""

from __future__ import annotations

import shlex
from dataclasses import dataclass


class CommandLineError(ValueError):
    """Raised when a command string cannot be split into a program and arguments."""


@dataclass(frozen=True)
class CommandLine:
    """Program plus argument list, split once from a shell-style command string."""

    program: str
    arguments: tuple[str, ...] = ()

    @staticmethod
    def parse(text: str) -> CommandLine:
        try:
            parts = shlex.split(text)
        except ValueError as exc:
            raise CommandLineError(f"Invalid command '{text}': {exc}") from exc
        if not parts:
            raise CommandLineError("Command must not be empty.")
        return CommandLine(program=parts[0], arguments=tuple(parts[1:]))

    def argv(self, *extra: str) -> tuple[str, ...]:
        return (self.program, *self.arguments, *extra)

    def __str__(self) -> str:
        return shlex.join(self.argv())
