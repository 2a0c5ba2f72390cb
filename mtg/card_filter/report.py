"""
Report Generator - Format match results for humans and spreadsheets.

Produces the console summary plus JSON, CSV and XLSX exports of the
per-query outcomes.
"""

import csv
import io
import json
import logging
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Optional, TextIO

from openpyxl import Workbook
from openpyxl.styles import Font

from .errors import OutputError
from .matcher import summarize_results
from .models import MatchReport
from .output_writer import report_to_dict

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    "line",
    "query_name",
    "query_set",
    "tier",
    "kind",
    "card_name",
    "card_set",
    "card_id",
    "released_at",
]

UNMATCHED_COLUMNS = ["line", "query_name", "query_set", "source_line"]


def format_console(
    report: MatchReport,
    elapsed_ms: Optional[float] = None,
    show_unmatched: bool = True,
) -> str:
    """
    Format the end-of-run summary.

    Args:
        report: Result of the matching run
        elapsed_ms: Optional processing time to include
        show_unmatched: Whether to list unmatched queries

    Returns:
        Formatted string for console output
    """
    summary = summarize_results(report)
    lines = []

    lines.append("\n" + "=" * 50)
    lines.append("SUMMARY")
    lines.append("=" * 50)
    lines.append(f"Processed {summary['total']} queries")
    lines.append(f"Found {summary['matched']} matches")
    lines.append(f"  Exact:     {summary['exact']}")
    lines.append(f"  Fallback:  {summary['fallback']}")
    lines.append(f"{summary['unmatched']} unmatched queries")
    lines.append(f"Match rate: {report.match_rate:.1%}")
    if elapsed_ms is not None:
        lines.append(f"Processing time: {elapsed_ms:.0f}ms")

    if show_unmatched and report.unmatched:
        lines.append("\nUnmatched queries:")
        for query in report.unmatched:
            lines.append(f"  {query.name} [{query.set_code}]")

    return "\n".join(lines)


def _match_rows(report: MatchReport) -> list[list]:
    """One row per query, in input line order."""
    rows = []
    for m in report.matches:
        rows.append([
            m.query.line_number,
            m.query.name,
            m.query.set_code,
            m.tier.value,
            m.kind.value,
            m.card.name,
            m.card.set_code,
            m.card.identity,
            m.card.released_at,
        ])
    for q in report.unmatched:
        rows.append([q.line_number, q.name, q.set_code, "unmatched", "", "", "", "", ""])
    rows.sort(key=lambda row: row[0])
    return rows


def export_csv(report: MatchReport, output: TextIO | None = None) -> str:
    """
    Export per-query outcomes to CSV format.

    Args:
        report: Result of the matching run
        output: Optional file handle to write to

    Returns:
        CSV string (also writes to output if provided)
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer)

    writer.writerow(REPORT_COLUMNS)
    for row in _match_rows(report):
        writer.writerow(row)

    csv_content = buffer.getvalue()

    if output:
        output.write(csv_content)

    return csv_content


def export_xlsx(report: MatchReport) -> BytesIO:
    """
    Create a workbook with Matches and Unmatched sheets.

    Returns:
        BytesIO buffer containing the Excel file
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Matches"
    ws.append(REPORT_COLUMNS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in _match_rows(report):
        if row[3] != "unmatched":
            ws.append(row)

    ws_unmatched = wb.create_sheet("Unmatched")
    ws_unmatched.append(UNMATCHED_COLUMNS)
    for cell in ws_unmatched[1]:
        cell.font = Font(bold=True)
    for q in report.unmatched:
        ws_unmatched.append([q.line_number, q.name, q.set_code, q.source_line])

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer


def write_report(report: MatchReport, output_path: str | Path) -> Path:
    """
    Write a match report, format chosen by file extension.

    Supported: .json, .csv, .xlsx

    Raises:
        ValueError: For an unsupported extension
        OutputError: If the file cannot be written
    """
    path = Path(output_path)
    suffix = path.suffix.lower()
    if suffix not in (".json", ".csv", ".xlsx"):
        raise ValueError(f"Unsupported report format: {suffix or path.name}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix == ".json":
            with open(path, "w", encoding="utf-8") as f:
                json.dump(report_to_dict(report), f, indent=2, ensure_ascii=False)
        elif suffix == ".csv":
            with open(path, "w", newline="", encoding="utf-8") as f:
                export_csv(report, output=f)
        else:
            path.write_bytes(export_xlsx(report).getvalue())
    except OSError as e:
        raise OutputError(f"Failed to write report {path}: {e}") from e

    logger.info(f"Match report written to {path}")
    return path


def generate_report_filename(stem: str = "card_filter", extension: str = "json") -> str:
    """
    Generate a dated filename for a report.

    Returns:
        Filename like "card_filter_2026-01-08.json"
    """
    date_str = datetime.now().strftime("%Y-%m-%d")
    return f"{stem}_{date_str}.{extension}"
