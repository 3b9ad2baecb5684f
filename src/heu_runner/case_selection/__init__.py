"""Case selection domain exports."""

from .case_selector import (
    InvalidCaseSpec,
    case_file_name,
    detect_available_cases,
    resolve_cases,
    select_cases,
    split_case_spec,
)

__all__ = [
    "InvalidCaseSpec",
    "case_file_name",
    "detect_available_cases",
    "resolve_cases",
    "select_cases",
    "split_case_spec",
]
