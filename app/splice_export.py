# splice_export.py — SpliceTable -> styled .xlsx (bytes or file in OUTPUT_DIR)
from __future__ import annotations

import io
import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

import splice_settings
from splice_errors import OutputError
from splice_sheet import CABLE_HEADERS, MAIN_HEADERS, TAIL_HEADERS, UNUSED, Cell, SpliceTable

logger = logging.getLogger(__name__)

HEADER_FILL_XLSX = "DDDDDD"
UNUSED_FILL_XLSX = "F2F2F2"  # light grey for rows with no address
EXTRA_HEADERS = ["Sheet", "Terminal"]


def _cable_count(header: Sequence[Cell]) -> int:
    return max((len(header) - len(MAIN_HEADERS) - len(TAIL_HEADERS)) // len(CABLE_HEADERS), 0)


def column_widths(cable_count: int, total_columns: Optional[int] = None) -> List[int]:
    """Width hints per column; without total_columns only the header columns are covered."""
    widths = list(splice_settings.MAIN_COLUMN_WIDTHS)
    for _ in range(cable_count):
        widths.extend(splice_settings.CABLE_COLUMN_WIDTHS)
    widths.extend(splice_settings.TAIL_COLUMN_WIDTHS)
    if total_columns is None:
        total_columns = len(widths) - len(EXTRA_HEADERS)
    return widths[:total_columns]


# =========================
# Workbook
# =========================
def table_to_workbook(table: SpliceTable, *, sheet_name: str = "Splice Sheet") -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    if not table:
        return wb

    bold = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center")
    box = Border(left=Side(style="thin"), right=Side(style="thin"),
                 top=Side(style="thin"), bottom=Side(style="thin"))
    header_fill = PatternFill("solid", fgColor=HEADER_FILL_XLSX)
    unused_fill = PatternFill("solid", fgColor=UNUSED_FILL_XLSX)

    header = table[0]
    ws.append(list(header))
    for cell in ws[1]:
        cell.font = bold
        cell.alignment = center
        cell.border = box
        cell.fill = header_fill

    address_col = len(header)  # 1-based index of "Address"
    for row in table[1:]:
        ws.append(list(row))
        row_idx = ws.max_row
        unused = len(row) >= address_col and row[address_col - 1] == UNUSED
        for cell in ws[row_idx]:
            cell.border = box
            if unused:
                cell.fill = unused_fill

    widest = max(len(r) for r in table)
    for i, width in enumerate(column_widths(_cable_count(header), widest), start=1):
        ws.column_dimensions[get_column_letter(i)].width = width
    ws.freeze_panes = "A2"
    return wb


def table_to_workbook_bytes(table: SpliceTable, *, sheet_name: str = "Splice Sheet") -> bytes:
    out = io.BytesIO()
    table_to_workbook(table, sheet_name=sheet_name).save(out)
    return out.getvalue()


def table_to_frame(table: SpliceTable) -> pd.DataFrame:
    """Rectangular view for previews; rows without sheet/terminal are padded with blanks."""
    if not table:
        return pd.DataFrame()
    header = list(table[0])
    widest = max(len(r) for r in table)
    extra = [EXTRA_HEADERS[i] if i < len(EXTRA_HEADERS) else f"Extra {i + 1}"
             for i in range(widest - len(header))]
    columns = header + extra
    # duplicate "Port #" headers would collapse in a DataFrame; suffix them
    seen = {}
    unique = []
    for c in columns:
        seen[c] = seen.get(c, 0) + 1
        unique.append(c if seen[c] == 1 else f"{c} ({seen[c]})")
    rows = [list(r) + [""] * (widest - len(r)) for r in table[1:]]
    return pd.DataFrame(rows, columns=unique)


# =========================
# Files in OUTPUT_DIR
# =========================
def timestamped_filename(prefix: str = "splice_sheet") -> str:
    return f"{prefix}_{int(time.time() * 1000)}.xlsx"


def write_output(table: SpliceTable, filename: str) -> Path:
    path = splice_settings.ensure_output_dir() / Path(filename).name
    try:
        path.write_bytes(table_to_workbook_bytes(table))
    except OSError as e:
        raise OutputError(f"Error writing {path.name}: {e}") from e
    logger.info("Wrote %s (%d rows)", path, max(len(table) - 1, 0))
    return path


def resolve_output_file(filename: str) -> Path:
    base = Path(splice_settings.OUTPUT_DIR).resolve()
    path = (base / filename).resolve()
    if path.parent != base:
        raise OutputError(f"Invalid file name: {filename}")
    if not path.is_file():
        raise FileNotFoundError(filename)
    return path
