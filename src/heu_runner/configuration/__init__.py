"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_default_configuration,
    write_default_configuration,
)
from .loader import ConfigurationError, load_configuration, parse_configuration
from .runtime_settings import BuildSettings, Configuration, EvaluationMode, TestSettings

__all__ = [
    "BuildSettings",
    "Configuration",
    "EvaluationMode",
    "TestSettings",
    "ConfigurationError",
    "load_configuration",
    "parse_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_default_configuration",
    "write_default_configuration",
]
