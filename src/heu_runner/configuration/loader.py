"""Configuration loader service."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from heu_runner.case_selection import split_case_spec
from heu_runner.output_extraction import ExtractionRules, InvalidPatternError
from heu_runner.output_extraction.extraction_rules import DEFAULT_COMMENT_DELIMITER
from heu_runner.process_running import CommandLine, CommandLineError

from .runtime_settings import BuildSettings, Configuration, TestSettings

DEFAULT_IN_DIR = "./tools/in"
DEFAULT_OUT_DIR = "./tools/out"
DEFAULT_SCORE_REGEX = r"Score = (\d+)"
DEFAULT_COMMENT_REGEX = r"^# (.*)$"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def default_thread_count() -> int:
    return os.cpu_count() or 1


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}
    return parse_configuration(parsed, path=path)


def parse_configuration(parsed: Any, *, path: Path | None = None) -> Configuration:
    """Validate an already parsed configuration mapping."""
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    build = _parse_build_section(parsed.get("build"))
    test = _parse_test_section(parsed.get("test"))
    return Configuration(path=path, build=build, test=test)


def _parse_build_section(value: Any) -> BuildSettings:
    section = _optional_mapping(value, "build")
    enable = _optional_bool(section.get("enable"), "build.enable", default=True)
    command_text = _optional_string(section.get("command"), "build.command")
    if enable and command_text is None:
        raise ConfigurationError("build.command is required when build.enable is true.")
    command = _parse_command(command_text, "build.command") if command_text else None
    return BuildSettings(enable=enable, command=command)


def _parse_test_section(value: Any) -> TestSettings:
    section = _require_mapping(value, "test")
    bin_command = _parse_command(
        _require_non_empty_string(section.get("bin"), "test.bin"), "test.bin"
    )
    cases_text = _optional_string(_case_spec_text(section.get("cases")), "test.cases")
    threads = _require_positive_int(
        section.get("threads", default_thread_count()), "test.threads"
    )
    vis_text = _optional_string(section.get("vis"), "test.vis")
    tester_text = _optional_string(section.get("tester"), "test.tester")
    working_dir = _optional_string(section.get("working_dir"), "test.working_dir")
    clip_max_chars = section.get("clip_max_chars")
    try:
        extraction = ExtractionRules.compile(
            _require_non_empty_string(
                section.get("score_regex", DEFAULT_SCORE_REGEX), "test.score_regex"
            ),
            _require_non_empty_string(
                section.get("comment_regex", DEFAULT_COMMENT_REGEX), "test.comment_regex"
            ),
        )
    except InvalidPatternError as exc:
        raise ConfigurationError(f"test.{exc}") from exc
    return TestSettings(
        bin=bin_command,
        cases=split_case_spec(cases_text),
        threads=threads,
        no_evaluate=_optional_bool(section.get("no_evaluate"), "test.no_evaluate"),
        use_tester=_optional_bool(section.get("use_tester"), "test.use_tester"),
        in_dir=Path(
            _require_non_empty_string(section.get("in_dir", DEFAULT_IN_DIR), "test.in_dir")
        ),
        out_dir=Path(
            _require_non_empty_string(section.get("out_dir", DEFAULT_OUT_DIR), "test.out_dir")
        ),
        vis=_parse_command(vis_text, "test.vis") if vis_text else None,
        tester=_parse_command(tester_text, "test.tester") if tester_text else None,
        extraction=extraction,
        comment_delimiter=_delimiter(section.get("comment_delimiter")),
        working_dir=Path(working_dir) if working_dir else None,
        clip_max_chars=(
            None
            if clip_max_chars is None
            else _require_positive_int(clip_max_chars, "test.clip_max_chars")
        ),
    )


def _case_spec_text(value: Any) -> Any:
    # A single case id written without quotes loads as an int.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _parse_command(text: str, field_name: str) -> CommandLine:
    try:
        return CommandLine.parse(text)
    except CommandLineError as exc:
        raise ConfigurationError(f"{field_name}: {exc}") from exc


def _delimiter(value: Any) -> str:
    if value is None:
        return DEFAULT_COMMENT_DELIMITER
    if not isinstance(value, str):
        raise ConfigurationError("test.comment_delimiter must be a string.")
    return value


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, *, default: bool = False) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
