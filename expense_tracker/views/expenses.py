"""Expense list with search, add/edit form and delete actions.

Every successful write is followed by a rerun, which re-fetches the full
list from the endpoint; the table is never patched locally.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from ..analytics import search_expenses
from ..api_client import ApiError, ExpenseAPI
from ..config import CATEGORIES
from ..formatting import format_currency, format_display_date
from ..models import Expense, expenses_to_frame, native_id, parse_date
from ..notifications import notify_error, notify_success

logger = logging.getLogger(__name__)

SEARCH_KEY = 'expenses_search'
SHOW_FORM_KEY = 'expenses_show_form'
EDITING_KEY = 'expenses_editing'
FORM_NONCE_KEY = 'expenses_form_nonce'

CATEGORY_PLACEHOLDER = 'Select Category'


def load_expenses(api: ExpenseAPI) -> pd.DataFrame:
    """Fetch all expenses; on failure notify and fall back to an empty table."""
    try:
        return expenses_to_frame(api.list_expenses())
    except ApiError as exc:
        logger.warning("Could not load expenses: %s", exc)
        notify_error('Error fetching expenses')
        return expenses_to_frame([])


def validate_expense_form(title: str, amount: Optional[float], category: str,
                          spent_on: Optional[date]) -> List[str]:
    """Required-field checks; returns a list of messages, empty when valid."""
    errors = []
    if not (title or '').strip():
        errors.append('Title is required')
    if amount is None:
        errors.append('Amount is required')
    else:
        try:
            float(amount)
        except (TypeError, ValueError):
            errors.append('Amount must be a number')
    if not category or category == CATEGORY_PLACEHOLDER:
        errors.append('Category is required')
    if spent_on is None:
        errors.append('Date is required')
    return errors


def save_expense(api: ExpenseAPI, expense: Expense, editing_id: Any = None) -> bool:
    """Create or update ``expense``; notifies either way."""
    try:
        if editing_id is not None:
            api.update_expense(editing_id, expense)
            notify_success('Expense updated successfully')
        else:
            api.create_expense(expense)
            notify_success('Expense added successfully')
    except ApiError as exc:
        logger.warning("Could not save expense: %s", exc)
        notify_error('Error saving expense')
        return False
    return True


def remove_expense(api: ExpenseAPI, expense_id: Any) -> bool:
    try:
        api.delete_expense(expense_id)
    except ApiError as exc:
        logger.warning("Could not delete expense %s: %s", expense_id, exc)
        notify_error('Error deleting expense')
        return False
    notify_success('Expense deleted successfully')
    return True


def reset_form(session_state) -> None:
    session_state[SHOW_FORM_KEY] = False
    session_state[EDITING_KEY] = None
    session_state[FORM_NONCE_KEY] = session_state.get(FORM_NONCE_KEY, 0) + 1


def start_editing(session_state, record: Dict[str, Any]) -> None:
    session_state[EDITING_KEY] = record
    session_state[SHOW_FORM_KEY] = True
    session_state[FORM_NONCE_KEY] = session_state.get(FORM_NONCE_KEY, 0) + 1


def _render_form(api: ExpenseAPI) -> None:
    editing: Optional[Dict[str, Any]] = st.session_state.get(EDITING_KEY)
    nonce = st.session_state.get(FORM_NONCE_KEY, 0)
    heading = 'Edit Expense' if editing else 'Add New Expense'
    defaults = editing or {}

    options = [CATEGORY_PLACEHOLDER] + CATEGORIES
    default_category = defaults.get('category')
    category_index = options.index(default_category) if default_category in options else 0
    default_amount = defaults.get('amount')

    with st.container(border=True):
        st.subheader(heading)
        with st.form(f"expense_form_{nonce}"):
            title = st.text_input("Title", value=defaults.get('title', ''))
            amount = st.number_input(
                "Amount (₹)",
                value=float(default_amount) if default_amount is not None else None,
                min_value=0.0,
                step=1.0,
            )
            category = st.selectbox("Category", options, index=category_index)
            spent_on = st.date_input("Date", value=parse_date(defaults.get('date')))
            col1, col2 = st.columns(2)
            submitted = col1.form_submit_button(f"{'Update' if editing else 'Add'} Expense", type="primary")
            cancelled = col2.form_submit_button("Cancel")

    if cancelled:
        reset_form(st.session_state)
        st.rerun()

    if submitted:
        errors = validate_expense_form(title, amount, category, spent_on)
        if errors:
            for message in errors:
                st.error(message)
            return
        expense = Expense(title=title.strip(), amount=float(amount), category=category, date=spent_on)
        editing_id = editing.get('id') if editing else None
        if save_expense(api, expense, editing_id):
            reset_form(st.session_state)
            st.rerun()


def _render_table(api: ExpenseAPI, expenses: pd.DataFrame) -> None:
    if expenses.empty:
        st.info("No expenses to show.")
        return

    widths = [3, 2, 2, 2, 1, 1]
    header = st.columns(widths)
    for col, label in zip(header, ["Title", "Amount", "Category", "Date", "", ""]):
        col.markdown(f"**{label}**")

    for position, row in enumerate(expenses.itertuples(index=False)):
        expense_id = native_id(row.id)
        key = expense_id if expense_id is not None else f"row{position}"
        cols = st.columns(widths)
        cols[0].write(row.title)
        cols[1].write(format_currency(row.amount))
        cols[2].write(row.category)
        cols[3].write(format_display_date(row.date))
        if cols[4].button("✏️", key=f"edit_{key}", help="Edit"):
            start_editing(st.session_state, {
                'id': expense_id,
                'title': row.title,
                'amount': row.amount,
                'category': row.category,
                'date': row.date,
            })
            st.rerun()
        if cols[5].button("🗑️", key=f"delete_{key}", help="Delete"):
            if remove_expense(api, expense_id):
                st.rerun()


def render(api: ExpenseAPI) -> None:
    """Render the Expenses page."""
    st.session_state.setdefault(SHOW_FORM_KEY, False)
    st.session_state.setdefault(EDITING_KEY, None)

    expenses = load_expenses(api)

    search_col, add_col = st.columns([3, 1])
    with search_col:
        search = st.text_input("🔍 Search expenses...", key=SEARCH_KEY, label_visibility="collapsed",
                               placeholder="Search expenses...")
    with add_col:
        if st.button("➕ Add Expense", type="primary", use_container_width=True):
            reset_form(st.session_state)
            st.session_state[SHOW_FORM_KEY] = True

    if st.session_state.get(SHOW_FORM_KEY):
        _render_form(api)

    _render_table(api, search_expenses(expenses, search))
