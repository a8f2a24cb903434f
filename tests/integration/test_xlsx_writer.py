from __future__ import annotations

from openpyxl import load_workbook

from src.infrastructure.reports.xlsx_writer import XlsxWriter


def test_writes_matrix_with_multiline_cells(tmp_path):
    matrix = [
        ["name", "03-14-24", "03-15-24"],
        ["Amoxicillin", "Thor - Isadora\nLuna - Thalles", ""],
        ["Meloxicam", "", ""],
    ]
    target = tmp_path / "out" / "records_03-14-24_to_03-15-24.xlsx"

    path = XlsxWriter().write(matrix, target, sheet_name="Records")

    assert path == target and target.exists()
    ws = load_workbook(target)["Records"]
    assert [c.value for c in ws[1]] == ["name", "03-14-24", "03-15-24"]
    assert ws["B2"].value == "Thor - Isadora\nLuna - Thalles"
    assert ws["B2"].alignment.wrap_text is True
    assert ws["C2"].value is None
    assert ws["A3"].value == "Meloxicam"
    assert ws.column_dimensions["A"].width == 28
