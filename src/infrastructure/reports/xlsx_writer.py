from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)

NAME_COLUMN_WIDTH = 28
DAY_COLUMN_WIDTH = 12


class XlsxWriter:
    """Writes a header row plus data rows to a single-sheet workbook.

    Cells containing newlines are wrapped so stacked entries show as separate lines.
    """

    def write(self, matrix: Sequence[Sequence[str]], target: Path, *, sheet_name: str) -> Path:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name[:31] or "Sheet1"

        for row in matrix:
            ws.append([value if value != "" else None for value in row])

        for cell in ws[1]:
            cell.font = Font(bold=True)

        wrap = Alignment(wrap_text=True, vertical="top")
        for row in ws.iter_rows(min_row=2):
            for cell in row:
                if isinstance(cell.value, str) and "\n" in cell.value:
                    cell.alignment = wrap

        width = max((len(r) for r in matrix), default=0)
        for idx in range(1, width + 1):
            ws.column_dimensions[get_column_letter(idx)].width = (
                NAME_COLUMN_WIDTH if idx == 1 else DAY_COLUMN_WIDTH
            )

        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        wb.save(target)
        logger.info("Wrote %d rows to %s", max(len(matrix) - 1, 0), target)
        return target
