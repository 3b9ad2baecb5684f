"""Default configuration builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from heu_runner.configuration import load_configuration
from heu_runner.configuration.config_scaffold_builder import (
    build_default_configuration,
    write_default_configuration,
)


def test_build_default_configuration_contains_all_sections() -> None:
    scaffold = build_default_configuration(threads=6)

    assert "build:" in scaffold
    assert "test:" in scaffold
    assert "threads: 6" in scaffold
    assert "# Visualizer command" in scaffold


def test_default_configuration_parses_back_to_defaults() -> None:
    parsed = yaml.safe_load(build_default_configuration(threads=2))

    assert parsed["build"]["enable"] is True
    assert parsed["test"]["cases"] == "0-9"
    assert parsed["test"]["threads"] == 2
    assert parsed["test"]["score_regex"] == r"Score = (\d+)"
    assert parsed["test"]["comment_regex"] == r"^# (.*)$"


def test_write_default_configuration_writes_loadable_file(tmp_path: Path) -> None:
    output_path = tmp_path / "heu.yaml"

    written_path = write_default_configuration(output_path)

    assert written_path == output_path.resolve()
    configuration = load_configuration(output_path)
    assert configuration.test.cases == ("0-9",)
    assert configuration.test.vis is not None


def test_write_default_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "heu.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_default_configuration(output_path)
