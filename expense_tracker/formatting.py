"""Formatting utilities for currency, dates and markdown display."""

from __future__ import annotations

from typing import Any, Union

import pandas as pd

from .config import CURRENCY_SYMBOL


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators.

    Args:
        amount: The amount to format
        include_sign: Whether to prefix the rupee sign

    Returns:
        Formatted currency string (e.g., "₹1,234.50" or "1,234.50")

    Example:
        >>> format_currency(1234.5)
        '₹1,234.50'
        >>> format_currency(1234.5, include_sign=False)
        '1,234.50'
    """
    formatted = f"{amount:,.2f}"
    return f"{CURRENCY_SYMBOL}{formatted}" if include_sign else formatted


def format_grouped_currency(amount: Union[float, int]) -> str:
    """Rupee amount with thousands separators and no padded decimals.

    Up to three fraction digits are kept and trailing zeros dropped, which
    is how report totals and category lines are printed.

    Example:
        >>> format_grouped_currency(1234.5)
        '₹1,234.5'
        >>> format_grouped_currency(2000)
        '₹2,000'
    """
    formatted = f"{float(amount):,.3f}".rstrip('0').rstrip('.')
    if formatted == '-0':
        formatted = '0'
    return f"{CURRENCY_SYMBOL}{formatted}"


def format_plain_amount(amount: Union[float, int]) -> str:
    """Render an amount the way it was entered: no separators, no trailing ``.0``.

    Example:
        >>> format_plain_amount(250.0)
        '250'
        >>> format_plain_amount(99.5)
        '99.5'
    """
    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_short_date(value: Any) -> str:
    """``Jan 5`` style label used on trend charts."""
    ts = pd.to_datetime(value, errors='coerce')
    if pd.isna(ts):
        return ''
    return f"{ts:%b} {ts.day}"


def format_display_date(value: Any) -> str:
    """``M/D/YYYY`` date used in tables and CSV exports."""
    ts = pd.to_datetime(value, errors='coerce')
    if pd.isna(ts):
        return ''
    return f"{ts.month}/{ts.day}/{ts.year}"


def format_percentage(value: float) -> str:
    """Whole-number percentage; non-finite values render as ``N/A``."""
    if value is None or pd.isna(value) or value in (float('inf'), float('-inf')):
        return "N/A"
    return f"{value:.0f}%"
