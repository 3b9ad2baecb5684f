"""Default configuration file generation helpers."""

from __future__ import annotations

import json
from pathlib import Path

from .loader import (
    DEFAULT_COMMENT_REGEX,
    DEFAULT_IN_DIR,
    DEFAULT_OUT_DIR,
    DEFAULT_SCORE_REGEX,
    default_thread_count,
)

DEFAULT_CONFIG_FILENAME = "heu.yaml"

_CONFIG_TEMPLATE = """# Benchmark configuration for heu-runner.

build:
  # Run the build command once before any case.
  enable: true
  command: {build_command}

test:
  # Solver command; each case's input file is fed on standard input.
  bin: {bin}
  # Cases to run, e.g. "0-9" or "0 1 3-5". Leave empty to run every input file from 0000.txt.
  cases: {cases}
  # Number of cases run in parallel.
  threads: {threads}
  # Skip scoring; solver output and comments are still collected.
  no_evaluate: false
  # Run cases through the tester (interactive problems) instead of the visualizer.
  use_tester: false
  in_dir: {in_dir}
  out_dir: {out_dir}
  # Visualizer command; the input file and output file are appended as arguments.
  vis: {vis}
  # Tester command; the solver command is appended as arguments (used when use_tester is true).
  tester: {tester}
  # Pattern with one capture group pulling the score out of the scoring output.
  score_regex: {score_regex}
  # Pattern with one capture group pulling a comment out of each solver stderr line.
  comment_regex: {comment_regex}
  comment_delimiter: "/"
  # working_dir: "."
  # clip_max_chars: 100000
"""


def build_default_configuration(threads: int | None = None) -> str:
    """Render the commented default configuration file."""
    return _CONFIG_TEMPLATE.format(
        build_command=_quote("cargo build --release --bin a --target-dir target -q"),
        bin=_quote("./target/release/a"),
        cases=_quote("0-9"),
        threads=threads or default_thread_count(),
        in_dir=_quote(DEFAULT_IN_DIR),
        out_dir=_quote(DEFAULT_OUT_DIR),
        vis=_quote(
            "cargo run --manifest-path tools/Cargo.toml --bin vis --target-dir=tools/target -r"
        ),
        tester=_quote(
            "cargo run --manifest-path tools/Cargo.toml --bin tester --target-dir=tools/target -r"
        ),
        score_regex=_quote(DEFAULT_SCORE_REGEX),
        comment_regex=_quote(DEFAULT_COMMENT_REGEX),
    )


def write_default_configuration(output_path: Path | str) -> Path:
    """Write the default configuration file to the requested output path.

    Args:
      output_path: Destination file path.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the file fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_default_configuration(), encoding="utf-8")
    return destination.resolve()


def _quote(value: str) -> str:
    # JSON string syntax is a valid YAML double-quoted scalar.
    return json.dumps(value)
