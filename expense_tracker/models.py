"""Record types exchanged with the REST endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

EXPENSE_COLUMNS = ['id', 'title', 'amount', 'category', 'date']


def native_id(value: Any) -> Any:
    """Unwrap numpy scalars so ids serialize cleanly to JSON and URLs."""
    if value is None:
        return None
    if hasattr(value, 'item'):
        value = value.item()
    if isinstance(value, float):
        if value != value:
            return None
        if value.is_integer():
            return int(value)
    return value


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date string (or date/datetime) into a ``date``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        parsed = pd.to_datetime(str(value))
    except (ValueError, TypeError):
        return None
    return None if pd.isna(parsed) else parsed.date()


@dataclass
class Expense:
    title: str
    amount: float
    category: str
    date: Optional[date]
    id: Optional[Union[int, str]] = field(default=None)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Expense':
        """Build an expense from a wire record, tolerating loose types."""
        try:
            amount = float(record.get('amount') or 0)
        except (TypeError, ValueError):
            amount = 0.0
        return cls(
            id=record.get('id'),
            title=str(record.get('title') or ''),
            amount=amount,
            category=str(record.get('category') or ''),
            date=parse_date(record.get('date')),
        )

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the wire format. ``id`` is omitted when unset."""
        payload: Dict[str, Any] = {
            'title': self.title,
            'amount': self.amount,
            'category': self.category,
            'date': self.date.isoformat() if self.date else '',
        }
        if self.id is not None:
            payload['id'] = self.id
        return payload


def expenses_to_frame(records: Iterable[Union[Expense, Dict[str, Any]]]) -> pd.DataFrame:
    """Convert wire records into a frame with typed ``amount`` and ``date`` columns.

    Rows keep the backend's insertion order.
    """
    rows: List[Dict[str, Any]] = []
    for record in records or []:
        expense = record if isinstance(record, Expense) else Expense.from_record(record)
        rows.append({
            'id': expense.id,
            'title': expense.title,
            'amount': expense.amount,
            'category': expense.category,
            'date': expense.date,
        })
    df = pd.DataFrame(rows, columns=EXPENSE_COLUMNS)
    df['amount'] = pd.to_numeric(df['amount'], errors='coerce').fillna(0.0).astype(float)
    df['date'] = pd.to_datetime(df['date'], errors='coerce')
    return df


def normalize_budgets(raw: Any) -> Dict[str, float]:
    """Coerce a budgets payload into ``{category: ceiling}``.

    Non-numeric values are dropped; json-server may add an ``id`` key to
    singleton resources so that one is ignored as well.
    """
    if not isinstance(raw, dict):
        return {}
    budgets: Dict[str, float] = {}
    for key, value in raw.items():
        if key == 'id' or not key:
            continue
        try:
            budgets[str(key)] = float(value)
        except (TypeError, ValueError):
            continue
    return budgets
