"""Report exports: CSV rows and a fixed-layout PDF summary.

Both exports are built in memory from the currently filtered expenses and
handed to ``st.download_button``; nothing is written to disk and nothing
is sent to the REST endpoint.
"""

from __future__ import annotations

import html
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .config import CURRENCY_SYMBOL
from .formatting import format_display_date, format_grouped_currency, format_plain_amount

logger = logging.getLogger(__name__)

CSV_FILENAME = 'expense-report.csv'
PDF_FILENAME = 'expense-report.pdf'
CSV_COLUMNS = ['Title', 'Amount', 'Category', 'Date']

# (text, font size in pt, left indent in mm)
ReportLine = Tuple[str, int, int]


class ExportError(Exception):
    """Raised when a report cannot be produced."""


def build_csv_rows(expenses: pd.DataFrame) -> pd.DataFrame:
    """Flatten expenses into the exported columns."""
    if expenses is None or expenses.empty:
        return pd.DataFrame(columns=CSV_COLUMNS)
    return pd.DataFrame({
        'Title': expenses['title'].astype(str).values,
        'Amount': [f"{CURRENCY_SYMBOL}{format_plain_amount(a)}" for a in expenses['amount']],
        'Category': expenses['category'].astype(str).values,
        'Date': [format_display_date(d) for d in expenses['date']],
    }, columns=CSV_COLUMNS)


def export_csv(expenses: pd.DataFrame) -> bytes:
    """UTF-8 CSV with a header row and one row per expense."""
    rows = build_csv_rows(expenses)
    return rows.to_csv(index=False, lineterminator='\n').encode('utf-8')


def report_period(start: Optional[str], end: Optional[str]) -> str:
    return f"Report Period: {start or 'All time'} to {end or 'All time'}"


def report_lines(spend: Dict[str, float], start: Optional[str], end: Optional[str]) -> List[ReportLine]:
    """The textual layout of the PDF report, top to bottom."""
    lines: List[ReportLine] = [
        ('Expense Report', 20, 0),
        (report_period(start, end), 12, 0),
        ('Expenses by Category:', 14, 0),
    ]
    for category, amount in spend.items():
        lines.append((f"{category}: {format_grouped_currency(amount)}", 12, 10))
    lines.append((f"Total Expenses: {format_grouped_currency(sum(spend.values()))}", 14, 0))
    return lines


def build_report_html(spend: Dict[str, float], start: Optional[str], end: Optional[str]) -> str:
    """HTML document that WeasyPrint renders into the PDF."""
    lines = report_lines(spend, start, end)
    body = []
    for index, (text, size, indent) in enumerate(lines):
        spacing = 'margin-top: 10mm;' if index in (2, len(lines) - 1) else ''
        body.append(
            f'<p style="font-size: {size}pt; margin-left: {indent}mm; {spacing}">'
            f'{html.escape(text)}</p>'
        )
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        '<style>@page { size: A4; margin: 20mm; } '
        'body { font-family: "DejaVu Sans", sans-serif; } p { margin: 2mm 0; }</style>'
        '</head><body>' + ''.join(body) + '</body></html>'
    )


def export_pdf(spend: Dict[str, float], start: Optional[str], end: Optional[str]) -> bytes:
    """Render the report layout to PDF bytes.

    Raises:
        ExportError: WeasyPrint (or its system libraries) is unavailable or
            rendering fails.
    """
    try:
        from weasyprint import HTML
    except Exception as exc:
        raise ExportError(
            "PDF export requires WeasyPrint system dependencies; install them for your OS and retry."
        ) from exc

    started = datetime.now()
    try:
        pdf_bytes = HTML(string=build_report_html(spend, start, end)).write_pdf()
    except Exception as exc:
        logger.exception("Error generating PDF report")
        raise ExportError(f"Could not generate PDF report: {exc}") from exc

    duration = (datetime.now() - started).total_seconds()
    logger.info(
        "report_generated: period=%s to %s categories=%d pdf_size_bytes=%d pdf_duration=%.2fs",
        start or 'all', end or 'all', len(spend), len(pdf_bytes), duration,
    )
    return pdf_bytes
