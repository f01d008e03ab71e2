"""Budget allocation view.

Budgets are stored as a single ``{category: ceiling}`` object.  Editing one
category rebuilds the whole map locally and PUTs it back in full, so two
overlapping edits from different tabs can overwrite each other.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import pandas as pd
import streamlit as st

from ..analytics import capped_percentage, percent_of_budget, spend_for_budget_categories
from ..api_client import ApiError, ExpenseAPI
from ..formatting import format_currency, format_percentage
from ..models import expenses_to_frame
from ..notifications import notify_error, notify_success
from ..session import AppState
from ..visualization import create_category_doughnut_chart, plotly_template

logger = logging.getLogger(__name__)

EDITING_KEY = 'budget_editing_category'


def load_budget_data(api: ExpenseAPI) -> Tuple[Dict[str, float], pd.DataFrame]:
    """Fetch budgets and expenses together; notify and return empties on failure."""
    try:
        budgets, records = api.fetch_budgets_and_expenses()
    except ApiError as exc:
        logger.warning("Could not load budget data: %s", exc)
        notify_error('Error fetching data')
        return {}, expenses_to_frame([])
    return budgets, expenses_to_frame(records)


def update_budget(api: ExpenseAPI, budgets: Dict[str, float], category: str,
                  amount: float) -> Optional[Dict[str, float]]:
    """Replace one ceiling and send the entire map; returns the new map or None."""
    updated = dict(budgets)
    updated[category] = float(amount)
    try:
        api.replace_budgets(updated)
    except ApiError as exc:
        logger.warning("Could not update budget for %s: %s", category, exc)
        notify_error('Error updating budget')
        return None
    notify_success('Budget updated successfully')
    return updated


def _render_category_row(api: ExpenseAPI, budgets: Dict[str, float], category: str,
                         ceiling: float, spent: float) -> None:
    with st.container(border=True):
        name_col, action_col = st.columns([2, 3])
        name_col.markdown(f"**{category}**")

        if st.session_state.get(EDITING_KEY) == category:
            with action_col:
                value_col, save_col, cancel_col = st.columns([2, 1, 1])
                new_value = value_col.number_input(
                    "New budget",
                    value=float(ceiling),
                    min_value=0.0,
                    step=100.0,
                    key=f"budget_value_{category}",
                    label_visibility="collapsed",
                )
                if save_col.button("Save", key=f"budget_save_{category}", type="primary"):
                    if update_budget(api, budgets, category, new_value) is not None:
                        st.session_state[EDITING_KEY] = ''
                        st.rerun()
                if cancel_col.button("Cancel", key=f"budget_cancel_{category}"):
                    st.session_state[EDITING_KEY] = ''
                    st.rerun()
        else:
            with action_col:
                value_col, edit_col = st.columns([3, 1])
                value_col.markdown(format_currency(ceiling))
                if edit_col.button("Edit", key=f"budget_edit_{category}"):
                    st.session_state[EDITING_KEY] = category
                    st.rerun()

        spent_col, pct_col = st.columns([3, 1])
        spent_col.caption(f"Spent: {format_currency(spent)}")
        pct_col.caption(format_percentage(percent_of_budget(spent, ceiling)))
        st.progress(int(capped_percentage(spent, ceiling)))
        if spent > ceiling:
            st.markdown(":red[Over budget]")


def render(api: ExpenseAPI, state: AppState) -> None:
    """Render the Budget page."""
    st.session_state.setdefault(EDITING_KEY, '')
    budgets, expenses = load_budget_data(api)
    spend = spend_for_budget_categories(expenses, budgets)
    template = plotly_template(state.theme)

    allocation_col, comparison_col = st.columns(2)
    with allocation_col:
        st.subheader("Budget Allocation")
        st.plotly_chart(
            create_category_doughnut_chart(budgets, title="Budget Allocation", template=template),
            use_container_width=True,
        )

    with comparison_col:
        st.subheader("Budget vs Expenses")
        if not budgets:
            st.info("No budgets defined yet.")
        for category, ceiling in budgets.items():
            _render_category_row(api, budgets, category, ceiling, spend.get(category, 0.0))
