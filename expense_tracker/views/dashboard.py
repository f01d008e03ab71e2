"""Dashboard: summary cards, budget warnings, trend and distribution charts."""

from __future__ import annotations

import streamlit as st

from ..analytics import dashboard_summary, trend_by_date
from ..api_client import ExpenseAPI
from ..config import ALL_CATEGORIES_LABEL
from ..formatting import format_currency
from ..session import AppState
from ..visualization import (
    create_category_bar_chart,
    create_category_doughnut_chart,
    create_trend_line_chart,
    plotly_template,
)
from .budget import load_budget_data

TREND_CATEGORY_KEY = 'dashboard_trend_category'

STATUS_ICONS = {
    'danger': '🔴',
    'warning': '🟡',
    'safe': '🟢',
}


def _render_summary_cards(summary) -> None:
    col1, col2, col3, col4 = st.columns(4)
    change = summary['expense_change']

    with col1:
        st.metric(
            label="💸 Total Expenses",
            value=format_currency(summary['total_expenses']),
            delta=f"{change:+.1f}% from last month",
            delta_color="inverse",
            help="Last month is an estimate (80% of the current total), not a recorded figure.",
        )
    with col2:
        st.metric(
            label="📊 Total Budget",
            value=format_currency(summary['total_budget']),
            help="Monthly allocation",
        )
    with col3:
        st.metric(
            label="🧾 Transactions",
            value=summary['transaction_count'],
            help="This month",
        )
    with col4:
        st.metric(
            label="🎯 Budget Status",
            value=f"{summary['budget_utilization']:.0f}%",
            help="Of total budget used",
        )


def _render_budget_warnings(summary) -> None:
    st.subheader("Budget Warnings")
    warnings = summary['warnings']
    if warnings.empty:
        st.info("No budgets defined yet.")
        return
    for row in warnings.itertuples(index=False):
        st.markdown(f"**{row.Category}** {STATUS_ICONS[row.Status]} {row.Message}")
        st.caption(
            f"{format_currency(row.Spent)} / {format_currency(row.Budget)} · {row.Percentage:.0f}%"
        )
        st.progress(int(row.Percentage))


def _render_quick_stats(summary) -> None:
    st.subheader("Quick Stats")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Highest Expense Category", summary['highest_category'])
    col2.metric("Average Transaction", format_currency(summary['average_transaction']))
    col3.metric("Budget Utilization", f"{summary['budget_utilization']:.0f}%")
    col4.metric("Categories Over Budget", summary['over_budget_count'])


def render(api: ExpenseAPI, state: AppState) -> None:
    """Render the Dashboard page."""
    budgets, expenses = load_budget_data(api)
    summary = dashboard_summary(expenses, budgets)
    template = plotly_template(state.theme)

    _render_summary_cards(summary)

    chart_col, warnings_col = st.columns([2, 1])
    with chart_col:
        st.plotly_chart(
            create_category_bar_chart(
                summary['spend_by_category'], title="Monthly Expenses by Category", template=template
            ),
            use_container_width=True,
        )
    with warnings_col:
        _render_budget_warnings(summary)

    trend_col, doughnut_col = st.columns(2)
    with trend_col:
        options = [ALL_CATEGORIES_LABEL] + list(budgets.keys())
        if st.session_state.get(TREND_CATEGORY_KEY) not in options:
            st.session_state[TREND_CATEGORY_KEY] = ALL_CATEGORIES_LABEL
        selected = st.selectbox(
            "Select Category for Trend Analysis",
            options,
            key=TREND_CATEGORY_KEY,
            format_func=lambda value: "All Categories" if value == ALL_CATEGORIES_LABEL else value,
        )
        st.plotly_chart(
            create_trend_line_chart(trend_by_date(expenses, selected), selected, template=template),
            use_container_width=True,
        )
    with doughnut_col:
        st.plotly_chart(
            create_category_doughnut_chart(summary['spend_by_category'], template=template),
            use_container_width=True,
        )

    _render_quick_stats(summary)
