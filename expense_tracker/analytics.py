"""Aggregation helpers for expenses and budgets.

This module contains pure functions over the expense frame produced by
:func:`expense_tracker.models.expenses_to_frame` (columns ``id``,
``title``, ``amount``, ``category``, ``date``) and over the budget map
``{category: ceiling}``.  They are designed to operate independently of
any user interface so that every view can share them and they can be
unit tested without Streamlit.

Percentages are rounded half-up to whole numbers so the figures shown in
the cards, tables and exports agree with each other.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd

from .config import (
    ALL_CATEGORIES_LABEL,
    DANGER_THRESHOLD,
    PREVIOUS_MONTH_PLACEHOLDER_RATIO,
    WARNING_THRESHOLD,
)

DateLike = Union[str, date, pd.Timestamp, None]

STATUS_MESSAGES = {
    'danger': 'Critical! Budget exceeded',
    'warning': 'Warning! Approaching budget limit',
    'safe': 'Within budget',
}


def round_half_up(value: float) -> float:
    """Round to the nearest whole number, halves rounded up."""
    if not np.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Totals and grouping
# ---------------------------------------------------------------------------


def total_of(expenses: pd.DataFrame) -> float:
    """Sum of ``amount`` over all rows."""
    if expenses is None or expenses.empty:
        return 0.0
    return float(expenses['amount'].sum())


def by_category(expenses: pd.DataFrame) -> Dict[str, float]:
    """Map each category present to its summed amount, in order of first appearance."""
    if expenses is None or expenses.empty:
        return {}
    grouped = expenses.groupby('category', sort=False)['amount'].sum()
    return {str(category): float(amount) for category, amount in grouped.items()}


def spend_for_budget_categories(expenses: pd.DataFrame, budgets: Dict[str, float]) -> Dict[str, float]:
    """Spend restricted to the budgeted categories, ``0.0`` for untouched ones."""
    spend = by_category(expenses)
    return {category: spend.get(category, 0.0) for category in budgets}


def average_transaction(expenses: pd.DataFrame) -> float:
    if expenses is None or expenses.empty:
        return 0.0
    return total_of(expenses) / len(expenses)


def highest_category(spend: Dict[str, float]) -> str:
    """Category with the highest spend; ties go to the later category."""
    best_name, best_amount = 'None', 0.0
    for category, amount in spend.items():
        if not best_amount > amount:
            best_name, best_amount = category, amount
    return best_name


def category_share_table(spend: Dict[str, float]) -> pd.DataFrame:
    """Build a Category / Amount / Percentage table from a spend mapping."""
    total = sum(spend.values())
    rows = []
    for category, amount in spend.items():
        share = round_half_up(amount / total * 100) if total else 0.0
        rows.append({'Category': category, 'Amount': amount, 'Percentage': share})
    return pd.DataFrame(rows, columns=['Category', 'Amount', 'Percentage'])


# ---------------------------------------------------------------------------
# Date handling
# ---------------------------------------------------------------------------


def filter_by_date_range(expenses: pd.DataFrame, start: DateLike, end: DateLike) -> pd.DataFrame:
    """Keep rows whose date falls within ``[start, end]``.

    When either bound is missing the input is returned unchanged.
    """
    if not start or not end:
        return expenses
    start_ts = pd.to_datetime(start).normalize()
    end_ts = pd.to_datetime(end).normalize()
    dates = pd.to_datetime(expenses['date'], errors='coerce').dt.normalize()
    return expenses[(dates >= start_ts) & (dates <= end_ts)]


def trend_by_date(expenses: pd.DataFrame, filter_category: Optional[str] = None) -> pd.DataFrame:
    """Daily spend series, optionally restricted to one category.

    Every date present in ``expenses`` is kept, even when no row matches
    the category, so switching categories never changes the x-axis.

    Returns
    -------
    pandas.DataFrame
        Columns ``date`` (Timestamp), ``label`` (e.g. ``"Jan 5"``) and
        ``amount``, sorted chronologically.
    """
    columns = ['date', 'label', 'amount']
    if expenses is None or expenses.empty:
        return pd.DataFrame(columns=columns)

    frame = expenses[['date', 'category', 'amount']].copy()
    frame['date'] = pd.to_datetime(frame['date'], errors='coerce').dt.normalize()
    frame = frame.dropna(subset=['date'])
    if frame.empty:
        return pd.DataFrame(columns=columns)

    if filter_category and filter_category != ALL_CATEGORIES_LABEL:
        frame['amount'] = frame['amount'].where(frame['category'] == filter_category, 0.0)

    series = frame.groupby('date')['amount'].sum().sort_index()
    trend = series.reset_index()
    trend['label'] = trend['date'].apply(lambda ts: f"{ts:%b} {ts.day}")
    return trend[columns]


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------


def percent_of_budget(spent: float, budget: float) -> float:
    """``spent / budget * 100`` rounded to a whole number.

    A zero budget yields ``inf`` (or ``nan`` when nothing was spent);
    callers must check with ``math.isfinite`` before displaying it.
    """
    if not budget:
        if spent > 0:
            return math.inf
        if spent < 0:
            return -math.inf
        return math.nan
    return round_half_up(spent / budget * 100)


def budget_status(spent: float, budget: float) -> Dict[str, Any]:
    """Classify spend against a ceiling into safe / warning / danger.

    The unrounded ratio decides the tier: ``< 75`` is safe, ``75-89`` is a
    warning and ``>= 90`` is danger.  A missing or zero ceiling counts as
    danger as soon as anything is spent.
    """
    if budget:
        percentage = spent / budget * 100
    else:
        percentage = math.inf if spent > 0 else 0.0

    if percentage >= DANGER_THRESHOLD:
        status = 'danger'
    elif percentage >= WARNING_THRESHOLD:
        status = 'warning'
    else:
        status = 'safe'
    return {
        'status': status,
        'message': STATUS_MESSAGES[status],
        'percentage': percentage,
    }


def capped_percentage(spent: float, budget: float) -> float:
    """Progress-bar fill in ``[0, 100]``."""
    if not budget:
        return 100.0 if spent > 0 else 0.0
    return float(min(max(spent / budget * 100, 0.0), 100.0))


def total_budget(budgets: Dict[str, float]) -> float:
    """Sum of all ceilings, falling back to ``1`` so ratios stay finite."""
    return float(sum(budgets.values())) or 1.0


def budget_utilization(total_spent: float, budgets: Dict[str, float]) -> float:
    return round_half_up(total_spent / total_budget(budgets) * 100)


def over_budget_count(spend: Dict[str, float], budgets: Dict[str, float]) -> int:
    """Number of budgeted categories whose spend strictly exceeds the ceiling."""
    return sum(1 for category, ceiling in budgets.items() if spend.get(category, 0.0) > ceiling)


def budget_warnings(spend: Dict[str, float], budgets: Dict[str, float]) -> pd.DataFrame:
    """One row per budgeted category with its status tier and progress fill."""
    rows = []
    for category, ceiling in budgets.items():
        spent = spend.get(category, 0.0)
        status = budget_status(spent, ceiling)
        rows.append({
            'Category': category,
            'Spent': spent,
            'Budget': ceiling,
            'Percentage': round_half_up(capped_percentage(spent, ceiling)),
            'Status': status['status'],
            'Message': status['message'],
        })
    return pd.DataFrame(rows, columns=['Category', 'Spent', 'Budget', 'Percentage', 'Status', 'Message'])


# ---------------------------------------------------------------------------
# Period comparison
# ---------------------------------------------------------------------------


def previous_month_placeholder(total: float) -> float:
    """Synthetic "previous month" figure.

    There is no historical query behind this number; it is a fixed
    fraction of the current total and is labelled as an estimate in the UI.
    """
    return total * PREVIOUS_MONTH_PLACEHOLDER_RATIO


def month_over_month_change(current: float, previous: float) -> float:
    """Percent change from ``previous`` to ``current``; ``0`` when there is no baseline."""
    if not previous:
        return 0.0
    return (current - previous) / previous * 100


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def search_expenses(expenses: pd.DataFrame, text: str) -> pd.DataFrame:
    """Case-insensitive substring match on title or category."""
    needle = (text or '').strip().lower()
    if not needle or expenses.empty:
        return expenses
    title_match = expenses['title'].astype(str).str.lower().str.contains(needle, regex=False, na=False)
    category_match = expenses['category'].astype(str).str.lower().str.contains(needle, regex=False, na=False)
    return expenses[title_match | category_match]


# ---------------------------------------------------------------------------
# Dashboard summary
# ---------------------------------------------------------------------------


def dashboard_summary(expenses: pd.DataFrame, budgets: Dict[str, float]) -> Dict[str, Any]:
    """Compute every figure shown on the dashboard in one pass."""
    total = total_of(expenses)
    spend = by_category(expenses)
    previous = previous_month_placeholder(total)
    return {
        'total_expenses': total,
        'previous_month_expenses': previous,
        'expense_change': month_over_month_change(total, previous),
        'total_budget': total_budget(budgets),
        'transaction_count': 0 if expenses is None else len(expenses),
        'budget_utilization': budget_utilization(total, budgets),
        'spend_by_category': spend,
        'highest_category': highest_category(spend),
        'average_transaction': average_transaction(expenses),
        'over_budget_count': over_budget_count(spend, budgets),
        'warnings': budget_warnings(spend, budgets),
    }
