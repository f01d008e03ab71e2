import math
from datetime import date

import numpy as np
import pandas as pd

from expense_tracker.formatting import (
    format_currency,
    format_display_date,
    format_grouped_currency,
    format_percentage,
    format_plain_amount,
    format_short_date,
)
from expense_tracker.models import Expense, expenses_to_frame, native_id, normalize_budgets, parse_date


def test_format_currency():
    assert format_currency(1234.5) == '₹1,234.50'
    assert format_currency(0) == '₹0.00'
    assert format_currency(1234.5, include_sign=False) == '1,234.50'


def test_format_plain_amount():
    assert format_plain_amount(250.0) == '250'
    assert format_plain_amount(99.5) == '99.5'


def test_date_formats():
    assert format_display_date('2024-01-05') == '1/5/2024'
    assert format_short_date('2024-01-05') == 'Jan 5'
    assert format_display_date(None) == ''


def test_format_percentage_non_finite():
    assert format_percentage(42.4) == '42%'
    assert format_percentage(math.inf) == 'N/A'
    assert format_percentage(math.nan) == 'N/A'


def test_expense_record_omits_missing_id():
    expense = Expense(title='Tea', amount=20.0, category='Food', date=parse_date('2024-02-29'))
    assert expense.to_record() == {'title': 'Tea', 'amount': 20.0, 'category': 'Food', 'date': '2024-02-29'}


def test_expense_from_loose_record():
    expense = Expense.from_record({'id': '5', 'title': None, 'amount': 'x', 'date': 'not a date'})
    assert expense.id == '5'
    assert expense.title == ''
    assert expense.amount == 0.0
    assert expense.date is None


def test_native_id_unwraps_numpy_scalars():
    assert native_id(np.int64(3)) == 3
    assert type(native_id(np.int64(3))) is int
    assert native_id(np.float64(4.0)) == 4
    assert native_id(float('nan')) is None
    assert native_id('abc') == 'abc'


def test_normalize_budgets():
    assert normalize_budgets({'id': 1, 'Food': '500', 'Other': None}) == {'Food': 500.0}
    assert normalize_budgets([]) == {}


def test_parse_date_treats_missing_values_as_none():
    assert parse_date(pd.NaT) is None
    assert parse_date(float('nan')) is None
    assert parse_date('   ') is None
    assert parse_date('NaT') is None
    assert parse_date(pd.Timestamp('2024-01-05')) == date(2024, 1, 5)


def test_unparseable_stored_date_reaches_edit_form_as_none():
    frame = expenses_to_frame([{'id': 1, 'title': 'Tea', 'amount': 20, 'category': 'Food', 'date': 'bogus'}])
    row = next(frame.itertuples(index=False))
    assert parse_date(row.date) is None


def test_format_grouped_currency_drops_padded_decimals():
    assert format_grouped_currency(1234.5) == '₹1,234.5'
    assert format_grouped_currency(2000) == '₹2,000'
    assert format_grouped_currency(0) == '₹0'
    assert format_grouped_currency(1234567.125) == '₹1,234,567.125'
