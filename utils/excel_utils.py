# utils/excel_utils.py

import re
import pandas as pd
from io import BytesIO
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

REPORT_COLUMNS = [
    ("date", "Date", 15),
    ("day", "Day", 10),
    ("punch_in", "Punch In", 15),
    ("punch_out", "Punch Out", 15),
    ("late_minutes", "Late (min)", 10),
    ("overtime_minutes", "Overtime (min)", 15),
    ("status", "Status", 20),
]

# highlight -> (background ARGB, font ARGB or None)
HIGHLIGHT_STYLES = {
    "overtime": ("FFC6EFCE", "FF006100"),
    "half-day": ("FFFFEB9C", "FF9C5700"),
    "absent": ("FFFFC7CE", "FF9C0006"),
    "holiday": ("FFFFFF00", None),
}

INVALID_SHEET_CHARS = re.compile(r"[*?:/\[\]\\]")
MAX_SHEET_TITLE = 31
TITLE_EDGE_CHARS = " \t\r\n'"


def safe_sheet_title(name, used):
    """Strip characters Excel rejects, cap the length and keep titles unique."""
    # Excel also refuses titles that begin or end with an apostrophe.
    title = INVALID_SHEET_CHARS.sub("", name or "").strip(TITLE_EDGE_CHARS)
    title = title[:MAX_SHEET_TITLE].rstrip(TITLE_EDGE_CHARS) or "Employee"
    candidate = title
    counter = 2
    while candidate.lower() in used:
        suffix = f" ({counter})"
        candidate = title[:MAX_SHEET_TITLE - len(suffix)].rstrip(TITLE_EDGE_CHARS) + suffix
        counter += 1
    used.add(candidate.lower())
    return candidate


def style_header_row(worksheet, cols_count):
    thin_border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )
    for idx in range(1, cols_count + 1):
        cell = worksheet.cell(row=1, column=idx)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal='center')
        cell.fill = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")
        cell.border = thin_border


def apply_row_highlight(worksheet, row_idx, cols_count, highlight):
    style = HIGHLIGHT_STYLES.get(highlight)
    if not style:
        return
    bg_color, font_color = style
    for col_idx in range(1, cols_count + 1):
        cell = worksheet.cell(row=row_idx, column=col_idx)
        cell.fill = PatternFill(start_color=bg_color, end_color=bg_color, fill_type="solid")
        if font_color:
            cell.font = Font(color=font_color)


def build_report_workbook(report):
    """
    Render a monthly report as an .xlsx workbook, one sheet per employee.

    Args:
        report: MonthlyReport with the per-employee rows

    Returns:
        BytesIO positioned at the start of the workbook
    """
    keys = [key for key, _, _ in REPORT_COLUMNS]
    headers = [header for _, header, _ in REPORT_COLUMNS]

    output = BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        used_titles = set()
        sheets = report.sheets or []

        if not sheets:
            pd.DataFrame(columns=headers).to_excel(writer, index=False, sheet_name="Report")
            style_header_row(writer.sheets["Report"], len(headers))

        for sheet in sheets:
            title = safe_sheet_title(sheet.name, used_titles)
            data = [[getattr(row, key) for key in keys] for row in sheet.rows]
            df = pd.DataFrame(data, columns=headers)
            df.to_excel(writer, index=False, sheet_name=title)

            worksheet = writer.sheets[title]
            style_header_row(worksheet, len(headers))
            for idx, (_, _, width) in enumerate(REPORT_COLUMNS, 1):
                worksheet.column_dimensions[get_column_letter(idx)].width = width

            # Data starts on row 2, below the header
            for offset, row in enumerate(sheet.rows):
                highlight = row.highlight.value if row.highlight else None
                apply_row_highlight(worksheet, offset + 2, len(headers), highlight)

    output.seek(0)
    return output
