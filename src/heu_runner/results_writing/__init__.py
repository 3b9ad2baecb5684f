"""Results writing domain exports."""

from .report_models import Report, RunMetadata
from .run_report_writer import write_results_workbook
from .terminal_report import (
    build_report,
    format_with_commas,
    render_case_line,
    render_total,
    score_marker,
)

__all__ = [
    "Report",
    "RunMetadata",
    "build_report",
    "format_with_commas",
    "render_case_line",
    "render_total",
    "score_marker",
    "write_results_workbook",
]
