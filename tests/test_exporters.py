"""Tests for the CSV and PDF report exports."""

from __future__ import annotations

import csv
import io
import sys

import pytest

from expense_tracker import exporters
from expense_tracker.models import expenses_to_frame


def _expenses():
    return expenses_to_frame([
        {'id': 1, 'title': 'Groceries', 'amount': 300, 'category': 'Food', 'date': '2024-01-05'},
        {'id': 2, 'title': 'Cab, airport', 'amount': 99.5, 'category': 'Transportation', 'date': '2024-12-25'},
    ])


def _read_csv(data: bytes):
    return list(csv.reader(io.StringIO(data.decode('utf-8'))))


def test_export_csv_has_header_and_one_row_per_expense() -> None:
    rows = _read_csv(exporters.export_csv(_expenses()))

    assert rows[0] == ['Title', 'Amount', 'Category', 'Date']
    assert rows[1] == ['Groceries', '₹300', 'Food', '1/5/2024']
    assert rows[2] == ['Cab, airport', '₹99.5', 'Transportation', '12/25/2024']
    assert len(rows) == 3


def test_export_csv_for_empty_selection_is_header_only() -> None:
    rows = _read_csv(exporters.export_csv(expenses_to_frame([])))
    assert rows == [['Title', 'Amount', 'Category', 'Date']]


def test_report_lines_layout() -> None:
    lines = exporters.report_lines({'Food': 800.0, 'Shopping': 1200.0}, '2024-01-01', '2024-01-31')
    texts = [text for text, _, _ in lines]

    assert texts == [
        'Expense Report',
        'Report Period: 2024-01-01 to 2024-01-31',
        'Expenses by Category:',
        'Food: ₹800',
        'Shopping: ₹1,200',
        'Total Expenses: ₹2,000',
    ]
    assert lines[3][2] > 0


def test_report_period_defaults_to_all_time() -> None:
    assert exporters.report_period(None, None) == 'Report Period: All time to All time'


def test_report_html_escapes_category_names() -> None:
    document = exporters.build_report_html({'<b>Misc</b>': 10.0}, None, None)
    assert '&lt;b&gt;Misc&lt;/b&gt;' in document
    assert '<b>Misc</b>' not in document


def test_export_pdf_without_weasyprint(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, 'weasyprint', None)

    with pytest.raises(exporters.ExportError):
        exporters.export_pdf({'Food': 10.0}, None, None)


def test_export_pdf_renders_document() -> None:
    try:
        import weasyprint  # noqa: F401
    except Exception:
        pytest.skip("WeasyPrint system libraries are not available")

    pdf = exporters.export_pdf({'Food': 800.0}, '2024-01-01', '2024-01-31')
    assert pdf.startswith(b'%PDF')
