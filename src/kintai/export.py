"""Spreadsheet export of a single month's sessions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .config import ReportSettings
from .reporting import MonthDetail

logger = logging.getLogger(__name__)

_COLUMN_WIDTHS = {"A": 14, "B": 30, "C": 40}


def write_month_workbook(
    detail: MonthDetail, path: Path, settings: Optional[ReportSettings] = None
) -> Path:
    """Write ``detail`` to an .xlsx file at ``path`` and return the path."""
    settings = settings or ReportSettings()
    path = Path(path)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = settings.sheet_title

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    center = Alignment(horizontal="center", vertical="center")
    left = Alignment(horizontal="left", vertical="center")
    border = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )

    title_cell = ws.cell(row=1, column=1, value=f"{detail.title}{settings.title_suffix}")
    title_cell.font = Font(bold=True, size=14)

    for col, header in enumerate(settings.headers, 1):
        cell = ws.cell(row=2, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = center
        cell.border = border

    row = 3
    for entry in detail.rows:
        for col, value in enumerate((entry.date, entry.time_range, entry.content), 1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.border = border
            cell.alignment = center if col == 1 else left
        row += 1

    row += 1
    ws.cell(row=row, column=1, value=settings.total_label).font = Font(bold=True)
    ws.cell(row=row, column=2, value=detail.total_label)

    for column, width in _COLUMN_WIDTHS.items():
        ws.column_dimensions[column].width = width
    ws.freeze_panes = "A3"

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info("Wrote %d rows for %s to %s", len(detail.rows), detail.month, path)
    return path
