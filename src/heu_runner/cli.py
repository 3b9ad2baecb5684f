"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from heu_runner.clipboard_export import ClipboardError, copy_to_clipboard
from heu_runner.configuration import DEFAULT_CONFIG_FILENAME, write_default_configuration
from heu_runner.results_writing import render_total
from heu_runner.run_execution import RunExecutionError, RunRequest, execute_benchmark_run

_LOGGER = logging.getLogger(__name__)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="heu-runner")
def cli() -> None:
    """Local benchmark harness for heuristic contest solutions."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file to write",
)
def generate_config(output_path: str) -> None:
    """Generate a default YAML configuration with guidance comments."""
    try:
        resolved_output = write_default_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="run")
@click.argument("cases", nargs=-1)
@click.option(
    "-f",
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=f"Path to the YAML configuration file (default: ./{DEFAULT_CONFIG_FILENAME})",
)
@click.option(
    "-j", "--threads", type=click.IntRange(min=1), default=None, help="Number of parallel cases"
)
@click.option(
    "-n",
    "--no-evaluate",
    is_flag=True,
    default=False,
    help="Run the solver only and skip scoring.",
)
@click.option(
    "-t",
    "--tester",
    "use_tester",
    is_flag=True,
    default=False,
    help="Run cases through the tester command (interactive problems).",
)
@click.option(
    "--results-xlsx",
    "results_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path of a results workbook to write",
)
@click.option(
    "--no-clip",
    is_flag=True,
    default=False,
    help="Do not copy the last case's output to the clipboard.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
# pylint: disable-next=too-many-arguments,too-many-positional-arguments
def run_benchmark(
    cases: tuple[str, ...],
    config_path: str | None,
    threads: int | None,
    no_evaluate: bool,
    use_tester: bool,
    results_path: str | None,
    no_clip: bool,
    verbose: bool,
) -> None:
    """Run the solver over CASES (e.g. 0 1 3-5) and print per-case scores."""
    _configure_logging(verbose)
    try:
        outcome = execute_benchmark_run(
            RunRequest(
                config_path=_resolve_config_path(config_path),
                case_tokens=cases,
                threads=threads,
                no_evaluate=no_evaluate,
                use_tester=use_tester,
                results_path=results_path,
            ),
            on_case_line=click.echo,
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    click.echo(render_total(outcome.report))
    if outcome.results_path is not None:
        click.echo(f"results workbook: {outcome.results_path}", err=True)
    if not no_clip and outcome.report.last_output is not None:
        try:
            copy_to_clipboard(outcome.report.last_output)
        except ClipboardError as exc:
            _LOGGER.warning("clipboard copy skipped: %s", exc)
    if outcome.results_error is not None:
        raise CliError(outcome.results_error)


def _resolve_config_path(config_path: str | None) -> str:
    """Use the given path, or the default file, creating it when it is missing."""
    if config_path is not None:
        return config_path
    default_path = Path(DEFAULT_CONFIG_FILENAME)
    if not default_path.exists():
        try:
            write_default_configuration(default_path)
        except OSError as exc:
            raise CliError(str(exc)) from exc
        click.echo(f"Generated default config: {default_path}", err=True)
    return str(default_path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="heu-runner", standalone_mode=False)
    except CliError as exc:
        click.echo(f"Error: {exc}", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
