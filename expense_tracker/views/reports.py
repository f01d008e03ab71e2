"""Reports: date-range filter, category breakdown and PDF/CSV downloads."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, MutableMapping, Optional

import streamlit as st

from ..analytics import by_category, category_share_table, filter_by_date_range
from ..api_client import ExpenseAPI
from ..exporters import CSV_FILENAME, PDF_FILENAME, ExportError, export_csv, export_pdf
from ..formatting import format_grouped_currency
from ..session import AppState
from ..visualization import create_category_bar_chart, plotly_template
from .expenses import load_expenses

PDF_STATE_KEY = 'reports_pdf'


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def prepare_pdf(session_state: MutableMapping[str, Any], spend: Dict[str, float],
                start: Optional[str], end: Optional[str], requested: bool) -> Optional[bytes]:
    """PDF bytes for the current selection, rendered only on request.

    The last rendered report is kept in ``session_state`` together with the
    selection it was built from, so reruns reuse it until the period or the
    totals change.  Returns None when nothing has been generated yet.

    Raises:
        ExportError: rendering was requested and failed.
    """
    signature = (tuple(spend.items()), start, end)
    cached = session_state.get(PDF_STATE_KEY)
    if cached is not None and cached[0] == signature:
        return cached[1]
    if not requested:
        return None
    pdf_bytes = export_pdf(spend, start, end)
    session_state[PDF_STATE_KEY] = (signature, pdf_bytes)
    return pdf_bytes


def render(api: ExpenseAPI, state: AppState) -> None:
    """Render the Reports page."""
    expenses = load_expenses(api)

    with st.container(border=True):
        start_col, end_col, pdf_col, csv_col = st.columns([2, 2, 1, 1])
        start_date = start_col.date_input("Start Date", value=None, key="reports_start_date")
        end_date = end_col.date_input("End Date", value=None, key="reports_end_date")

        start, end = _iso(start_date), _iso(end_date)
        filtered = filter_by_date_range(expenses, start, end)
        spend = by_category(filtered)

        with pdf_col:
            requested = st.button("📄 Generate PDF", key="reports_generate_pdf")
            try:
                pdf_bytes = prepare_pdf(st.session_state, spend, start, end, requested)
            except ExportError as exc:
                st.error(str(exc))
                pdf_bytes = None
            if pdf_bytes is not None:
                st.download_button(
                    label="📄 Download PDF",
                    data=pdf_bytes,
                    file_name=PDF_FILENAME,
                    mime="application/pdf",
                )
        with csv_col:
            st.download_button(
                label="📥 Download CSV",
                data=export_csv(filtered),
                file_name=CSV_FILENAME,
                mime="text/csv",
            )

        st.plotly_chart(
            create_category_bar_chart(spend, title="Expenses by Category", template=plotly_template(state.theme)),
            use_container_width=True,
        )

        table = category_share_table(spend)
        if table.empty:
            st.info("No expenses in the selected period.")
            return
        table['Total Amount'] = table['Amount'].apply(format_grouped_currency)
        table['Percentage'] = table['Percentage'].map(lambda value: f"{value:.0f}%")
        st.dataframe(
            table[['Category', 'Total Amount', 'Percentage']],
            use_container_width=True,
            hide_index=True,
        )
