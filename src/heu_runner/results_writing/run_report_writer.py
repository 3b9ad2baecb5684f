"""Results workbook writer service."""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from heu_runner.output_extraction import join_comments

from .report_models import Report, RunMetadata

CASES_SHEET_NAME = "Cases"
RUN_INFO_SHEET_NAME = "RunInfo"
CASE_COLUMNS = ("CASE", "STATUS", "SCORE", "SCORE_STATUS", "ELAPSED_S", "COMMENTS", "ERROR")


def write_results_workbook(
    report: Report,
    output_path: Path | str,
    run_metadata: RunMetadata,
    *,
    comment_delimiter: str = "/",
) -> Path:
    """Write the report as a workbook with Cases and RunInfo sheets."""
    workbook = Workbook()
    cases_sheet = workbook.active
    cases_sheet.title = CASES_SHEET_NAME
    _write_case_rows(cases_sheet, report, comment_delimiter)
    _write_run_info_sheet(workbook.create_sheet(RUN_INFO_SHEET_NAME), report, run_metadata)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_case_rows(sheet: Worksheet, report: Report, comment_delimiter: str) -> None:
    sheet.append(CASE_COLUMNS)
    for result in report.results:
        sheet.append(
            (
                f"{result.case_id:04d}",
                result.status.value,
                result.score,
                result.score_status.value,
                round(result.elapsed_seconds, 3),
                join_comments(result.comments, comment_delimiter) or None,
                result.failure_detail,
            )
        )
    for index, header in enumerate(CASE_COLUMNS, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = max(len(header) + 4, 12)
    sheet.freeze_panes = "A2"


def _write_run_info_sheet(sheet: Worksheet, report: Report, run_metadata: RunMetadata) -> None:
    rows = (
        ("Run start", run_metadata.run_start.isoformat()),
        ("Config path", str(run_metadata.config_path or "")),
        ("Threads", run_metadata.threads),
        ("Evaluation mode", run_metadata.evaluation_mode),
        ("Cases", len(report.results)),
        ("Failed", report.failed_count),
        ("Total score", report.total_score),
    )
    for row in rows:
        sheet.append(row)
    sheet.column_dimensions["A"].width = 18
    sheet.column_dimensions["B"].width = 40
