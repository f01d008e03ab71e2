"""Plotly visualisation helpers for the expense tracker.

Each function accepts the plain mappings and frames returned by
:mod:`expense_tracker.analytics` and produces an interactive Plotly
figure that Streamlit renders via ``st.plotly_chart``.  Every function
takes a ``template`` argument so the charts follow the light or dark
theme selected in the navigation bar.
"""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .config import CURRENCY_SYMBOL

CATEGORY_COLORS = [
    'rgba(255, 99, 132, 0.7)',
    'rgba(54, 162, 235, 0.7)',
    'rgba(255, 206, 86, 0.7)',
    'rgba(75, 192, 192, 0.7)',
    'rgba(153, 102, 255, 0.7)',
    'rgba(255, 159, 64, 0.7)',
    'rgba(199, 199, 199, 0.7)',
]

TREND_COLOR = 'rgb(75, 192, 192)'


def plotly_template(theme: str) -> str:
    return 'plotly_dark' if theme == 'dark' else 'plotly_white'


def _empty_figure(template: str, message: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=message, template=template)
    return fig


def _spend_frame(spend: Dict[str, float]) -> pd.DataFrame:
    return pd.DataFrame(list(spend.items()), columns=["Category", "Amount"])


def create_category_bar_chart(spend: Dict[str, float], title: Optional[str] = None,
                              template: str = 'plotly_white') -> go.Figure:
    """Bar chart of spend per category.

    Parameters
    ----------
    spend : dict
        Mapping of category to summed amount.
    title : str, optional
        Chart title.
    template : str
        Plotly template name.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart of categories vs amounts.
    """
    if not spend:
        return _empty_figure(template)
    df = _spend_frame(spend)
    fig = px.bar(
        df,
        x="Category",
        y="Amount",
        color="Category",
        color_discrete_sequence=CATEGORY_COLORS,
    )
    fig.update_layout(
        title=title or "Expenses by Category",
        xaxis_title="Category",
        yaxis_title=f"Amount ({CURRENCY_SYMBOL})",
        yaxis_tickprefix=CURRENCY_SYMBOL,
        showlegend=False,
        template=template,
    )
    return fig


def create_category_doughnut_chart(values: Dict[str, float], title: Optional[str] = None,
                                   template: str = 'plotly_white') -> go.Figure:
    """Doughnut chart of a category mapping (spend or budget allocation)."""
    if not values:
        return _empty_figure(template)
    df = _spend_frame(values)
    fig = px.pie(
        df,
        names="Category",
        values="Amount",
        hole=0.5,
        color_discrete_sequence=CATEGORY_COLORS,
    )
    fig.update_layout(title=title or "Expense Distribution", legend_title_text="", template=template)
    return fig


def create_trend_line_chart(trend: pd.DataFrame, category: str,
                            template: str = 'plotly_white') -> go.Figure:
    """Filled line chart of the daily spend series.

    Parameters
    ----------
    trend : pandas.DataFrame
        Output of :func:`expense_tracker.analytics.trend_by_date` with
        ``label`` and ``amount`` columns.
    category : str
        Category the series is restricted to, used in the title.
    """
    title = f"{category} Expense Trend"
    if trend.empty:
        return _empty_figure(template, f"{title}: no data")
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=trend['label'],
        y=trend['amount'],
        mode='lines+markers',
        name=f"{category} Expenses Trend",
        line=dict(color=TREND_COLOR),
        fill='tozeroy',
        fillcolor='rgba(75, 192, 192, 0.2)',
    ))
    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title=f"Amount ({CURRENCY_SYMBOL})",
        yaxis_tickprefix=CURRENCY_SYMBOL,
        yaxis_rangemode='tozero',
        template=template,
    )
    return fig
