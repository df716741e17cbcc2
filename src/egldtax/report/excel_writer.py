"""TaxReportExcelWriter — builds the tax report workbook with openpyxl."""

from datetime import datetime, timezone
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from egldtax.report.service import TaxReport

# Sheet definitions: (sheet_name, headers)
SHEET_DEFS: list[tuple[str, list[str]]] = [
    (
        "tax_rows",
        ["Date (UTC)", "Function", "In Amount", "In Currency", "Out Amount", "Out Currency", "Fee (EGLD)", "Tx Hash", "Source"],
    ),
    (
        "transactions",
        ["Date (UTC)", "Tx Hash", "Function", "Sender", "Receiver", "Value", "Fee", "Status"],
    ),
    (
        "warnings",
        ["Warning"],
    ),
]

HEADER_FONT = Font(bold=True)


def _date(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _sheet_rows(report: TaxReport) -> dict[str, list[tuple]]:
    # Amounts stay strings: converting to float would lose precision
    return {
        "tax_rows": [
            (
                _date(r.timestamp), r.function, r.in_amount, r.in_currency,
                r.out_amount, r.out_currency, r.fee, r.tx_hash, r.source,
            )
            for r in report.tax_relevant_transactions
        ],
        "transactions": [
            (_date(t.timestamp), t.tx_hash, t.function, t.sender, t.receiver, t.value, t.fee, t.status or "")
            for t in report.all_transactions
        ],
        "warnings": [(w,) for w in report.warnings],
    }


class TaxReportExcelWriter:
    """Writes a TaxReport to an in-memory Excel buffer."""

    def write_to_buffer(self, report: TaxReport) -> BytesIO:
        wb = Workbook()
        data = _sheet_rows(report)

        for idx, (sheet_name, headers) in enumerate(SHEET_DEFS):
            if idx == 0:
                ws = wb.active
                ws.title = sheet_name
            else:
                ws = wb.create_sheet(title=sheet_name)

            for col_idx, header in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_idx, value=header)
                cell.font = HEADER_FONT

            for row_idx, row in enumerate(data[sheet_name], start=2):
                for col_idx, value in enumerate(row, start=1):
                    ws.cell(row=row_idx, column=col_idx, value=value)

            _auto_fit_columns(ws)

        buf = BytesIO()
        wb.save(buf)
        buf.seek(0)
        return buf


def _auto_fit_columns(ws) -> None:
    """Set column widths based on content (approximate)."""
    for col_cells in ws.columns:
        max_len = 0
        col_letter = get_column_letter(col_cells[0].column)
        for cell in col_cells:
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 3, 70)
