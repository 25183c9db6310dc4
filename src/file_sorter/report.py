"""
Move report export.

This module is responsible for:
- Writing the list of completed moves to an XLSX workbook (openpyxl)
  or a CSV file, chosen by the report path's extension
- Reading such a report back, e.g. to inspect or audit a previous run
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Sequence, Union

import openpyxl

from .types import MoveRecord

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["timestamp", "source_path", "destination_path", "renamed"]


def _report_rows(records: Sequence[MoveRecord], timestamp: str) -> List[List[str]]:
    return [
        [timestamp, record.source_path, record.destination_path, str(record.renamed)]
        for record in records
    ]


def write_report(
    records: Sequence[MoveRecord],
    report_path: Union[str, Path]
) -> Path:
    """
    Write the move report.

    Files ending in .xlsx are written as a workbook with a single "Moves"
    sheet; anything else is written as CSV. An empty run still produces a
    report with just the header row.

    Args:
        records: Completed moves, in the order they happened
        report_path: Where to write the report

    Returns:
        The path written

    Raises:
        FileNotFoundError: If the report's directory doesn't exist
    """
    path = Path(report_path)
    if not path.parent.exists():
        raise FileNotFoundError(f"Report directory not found: {path.parent}")

    timestamp = datetime.now().isoformat(timespec="seconds")
    rows = _report_rows(records, timestamp)

    if path.suffix.lower() == ".xlsx":
        workbook = openpyxl.Workbook()
        worksheet = workbook.active
        worksheet.title = "Moves"
        worksheet.append(REPORT_COLUMNS)
        for row in rows:
            worksheet.append(row)
        try:
            workbook.save(path)
        finally:
            workbook.close()
    else:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(REPORT_COLUMNS)
            writer.writerows(rows)

    logger.info(f"Wrote report with {len(records)} moves to: {path}")
    return path


def load_report(report_path: Union[str, Path]) -> List[Dict[str, str]]:
    """
    Read a report written by write_report().

    Args:
        report_path: Path to an .xlsx or .csv report

    Returns:
        One dict per move, keyed by REPORT_COLUMNS

    Raises:
        FileNotFoundError: If the report doesn't exist
        ValueError: If the report is empty or missing required columns
    """
    path = Path(report_path)
    if not path.exists():
        raise FileNotFoundError(f"Report not found: {path}")

    if path.suffix.lower() == ".xlsx":
        workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        try:
            raw_rows = [
                ["" if value is None else str(value) for value in row]
                for row in workbook.active.iter_rows(values_only=True)
            ]
        finally:
            workbook.close()
    else:
        with open(path, newline="", encoding="utf-8") as f:
            raw_rows = list(csv.reader(f))

    if not raw_rows:
        raise ValueError(f"Report is empty or invalid: {path}")

    header = [column.strip() for column in raw_rows[0]]
    missing = [column for column in REPORT_COLUMNS if column not in header]
    if missing:
        raise ValueError(
            f"Report is missing required columns: {', '.join(missing)}"
        )

    return [dict(zip(header, row)) for row in raw_rows[1:] if any(row)]
