"""Tests for the non-rendering handlers behind the Expenses, Budget and Reports pages."""

from __future__ import annotations

from datetime import date

from expense_tracker.api_client import ApiError
from expense_tracker.models import Expense
from expense_tracker.views import budget, expenses, reports


class FakeAPI:
    def __init__(self, fail=False, records=None, budgets=None):
        self.fail = fail
        self.records = records or []
        self.budgets = budgets or {}
        self.calls = []

    def _maybe_fail(self, method, path):
        if self.fail:
            raise ApiError(method, path, 'unavailable', 503)

    def list_expenses(self):
        self.calls.append(('list_expenses',))
        self._maybe_fail('GET', '/expenses')
        return self.records

    def create_expense(self, expense):
        self.calls.append(('create_expense', expense))
        self._maybe_fail('POST', '/expenses')

    def update_expense(self, expense_id, expense):
        self.calls.append(('update_expense', expense_id, expense))
        self._maybe_fail('PUT', f'/expenses/{expense_id}')

    def delete_expense(self, expense_id):
        self.calls.append(('delete_expense', expense_id))
        self._maybe_fail('DELETE', f'/expenses/{expense_id}')

    def replace_budgets(self, budgets):
        self.calls.append(('replace_budgets', budgets))
        self._maybe_fail('PUT', '/budgets')

    def fetch_budgets_and_expenses(self):
        self._maybe_fail('GET', '/budgets')
        return self.budgets, self.records


def _expense():
    return Expense(title='Lunch', amount=120.0, category='Food', date=date(2024, 1, 2))


def test_save_expense_creates_when_not_editing(toasts) -> None:
    api = FakeAPI()

    assert expenses.save_expense(api, _expense())

    assert api.calls[0][0] == 'create_expense'
    assert toasts == ['Expense added successfully']


def test_save_expense_updates_when_editing(toasts) -> None:
    api = FakeAPI()

    assert expenses.save_expense(api, _expense(), editing_id=4)

    assert api.calls[0][:2] == ('update_expense', 4)
    assert toasts == ['Expense updated successfully']


def test_save_expense_failure_notifies(toasts) -> None:
    assert not expenses.save_expense(FakeAPI(fail=True), _expense())
    assert toasts == ['Error saving expense']


def test_remove_expense(toasts) -> None:
    api = FakeAPI()
    assert expenses.remove_expense(api, 7)
    assert api.calls == [('delete_expense', 7)]
    assert toasts == ['Expense deleted successfully']


def test_remove_expense_failure_notifies(toasts) -> None:
    assert not expenses.remove_expense(FakeAPI(fail=True), 7)
    assert toasts == ['Error deleting expense']


def test_load_expenses_failure_falls_back_to_empty(toasts) -> None:
    frame = expenses.load_expenses(FakeAPI(fail=True))
    assert frame.empty
    assert list(frame.columns) == ['id', 'title', 'amount', 'category', 'date']
    assert toasts == ['Error fetching expenses']


def test_validate_expense_form_required_fields() -> None:
    assert expenses.validate_expense_form('Lunch', 120.0, 'Food', date(2024, 1, 2)) == []

    errors = expenses.validate_expense_form('  ', None, expenses.CATEGORY_PLACEHOLDER, None)
    assert errors == ['Title is required', 'Amount is required', 'Category is required', 'Date is required']

    assert expenses.validate_expense_form('Lunch', 'abc', 'Food', date(2024, 1, 2)) == ['Amount must be a number']


def test_form_state_helpers() -> None:
    store = {}
    expenses.start_editing(store, {'id': 1, 'title': 'Lunch'})
    assert store[expenses.SHOW_FORM_KEY] is True
    assert store[expenses.EDITING_KEY]['id'] == 1

    expenses.reset_form(store)
    assert store[expenses.SHOW_FORM_KEY] is False
    assert store[expenses.EDITING_KEY] is None
    assert store[expenses.FORM_NONCE_KEY] == 2


def test_update_budget_sends_full_map(toasts) -> None:
    api = FakeAPI()
    current = {'Food': 5000.0, 'Shopping': 2000.0}

    updated = budget.update_budget(api, current, 'Food', 6000)

    assert updated == {'Food': 6000.0, 'Shopping': 2000.0}
    assert api.calls == [('replace_budgets', {'Food': 6000.0, 'Shopping': 2000.0})]
    assert current['Food'] == 5000.0
    assert toasts == ['Budget updated successfully']


def test_update_budget_failure_keeps_previous(toasts) -> None:
    assert budget.update_budget(FakeAPI(fail=True), {'Food': 5000.0}, 'Food', 1) is None
    assert toasts == ['Error updating budget']


def test_load_budget_data_failure(toasts) -> None:
    budgets, frame = budget.load_budget_data(FakeAPI(fail=True))
    assert budgets == {}
    assert frame.empty
    assert toasts == ['Error fetching data']


def test_load_budget_data_builds_frame() -> None:
    api = FakeAPI(
        records=[{'id': 1, 'title': 'Lunch', 'amount': '120', 'category': 'Food', 'date': '2024-01-02'}],
        budgets={'Food': 500.0},
    )
    budgets, frame = budget.load_budget_data(api)
    assert budgets == {'Food': 500.0}
    assert frame['amount'].tolist() == [120.0]


def test_prepare_pdf_renders_only_when_requested(monkeypatch) -> None:
    renders = []

    def fake_export_pdf(spend, start, end):
        renders.append((dict(spend), start, end))
        return b'%PDF-fake'

    monkeypatch.setattr(reports, 'export_pdf', fake_export_pdf)
    store = {}
    spend = {'Food': 800.0}

    assert reports.prepare_pdf(store, spend, None, None, requested=False) is None
    assert renders == []

    assert reports.prepare_pdf(store, spend, None, None, requested=True) == b'%PDF-fake'
    assert reports.prepare_pdf(store, spend, None, None, requested=False) == b'%PDF-fake'
    assert len(renders) == 1


def test_prepare_pdf_drops_report_when_selection_changes(monkeypatch) -> None:
    monkeypatch.setattr(reports, 'export_pdf', lambda spend, start, end: b'%PDF-fake')
    store = {}
    reports.prepare_pdf(store, {'Food': 800.0}, None, None, requested=True)

    assert reports.prepare_pdf(store, {'Food': 800.0}, '2024-01-01', '2024-01-31', requested=False) is None
    assert reports.prepare_pdf(store, {'Food': 900.0}, None, None, requested=False) is None
