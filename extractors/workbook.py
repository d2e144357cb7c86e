"""
Workbook reader.

Loads an ``.xlsx`` file with openpyxl and reduces every worksheet to
``SheetRows``: physical row order, 1-based columns, trimmed text only.
"""

from __future__ import annotations

import datetime
import logging
import os
from typing import Any, List, Optional

import openpyxl
from openpyxl.worksheet.worksheet import Worksheet

from dto.cell_row import CellRow, SheetRows

logger = logging.getLogger(__name__)


class WorkbookError(ValueError):
    """The workbook or a requested worksheet cannot be read."""


def cell_text(value: Any) -> Optional[str]:
    """Render a cell value the way it reads in the sheet, or ``None`` if empty."""
    if value is None:
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, datetime.datetime):
        if value.time() == datetime.time(0, 0):
            text = value.date().isoformat()
        else:
            text = value.isoformat()
    elif isinstance(value, (datetime.date, datetime.time)):
        text = value.isoformat()
    else:
        text = str(value)
    text = text.strip()
    return text or None


def read_sheet(ws: Worksheet) -> SheetRows:
    rows: List[CellRow] = []
    for row in ws.iter_rows():
        cells = {}
        row_index = None
        for cell in row:
            row_index = cell.row
            text = cell_text(cell.value)
            if text is not None:
                cells[cell.column] = text
        if row_index is not None:
            rows.append(CellRow(index=row_index, cells=cells))
    return SheetRows(name=ws.title, rows=rows)


def read_workbook(
    file_path: str,
    sheet_name_filter: Optional[str] = None,
) -> List[SheetRows]:
    """
    Read every worksheet of *file_path* (or only *sheet_name_filter*).

    Cached formula results are used in place of formulas.
    """
    if not os.path.isfile(file_path):
        raise WorkbookError(f"Workbook '{file_path}' not found")

    logger.info("Loading workbook: %s", file_path)
    workbook = openpyxl.load_workbook(file_path, data_only=True)
    try:
        if sheet_name_filter and sheet_name_filter not in workbook.sheetnames:
            logger.error(
                "Worksheet '%s' not found. Available sheets: %s",
                sheet_name_filter,
                workbook.sheetnames,
            )
            raise WorkbookError(
                f"Worksheet '{sheet_name_filter}' not found in workbook"
            )

        names = [sheet_name_filter] if sheet_name_filter else workbook.sheetnames
        sheets = []
        for name in names:
            sheet = read_sheet(workbook[name])
            logger.info("  -> %s: %d row(s)", name, len(sheet.rows))
            sheets.append(sheet)
        return sheets
    finally:
        workbook.close()
