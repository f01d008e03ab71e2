"""Remote data accessor for the ``users``, ``expenses`` and ``budgets`` resources.

Every method issues exactly one HTTP call (except
:meth:`ExpenseAPI.fetch_budgets_and_expenses`, which issues two in
parallel).  Transport errors and non-2xx responses are raised as
:class:`ApiError`; callers decide how to surface them.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple, Union

import requests

from .config import API_BASE_URL, API_TIMEOUT
from .models import Expense, normalize_budgets

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when a call to the REST endpoint fails."""

    def __init__(self, method: str, path: str, message: str, status_code: Optional[int] = None):
        self.method = method
        self.path = path
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{method} {path} failed{detail}: {message}")


class ExpenseAPI:
    """Thin client over the expense tracker REST endpoint."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = API_TIMEOUT if timeout is None else timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        url = self.base_url + path
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(method, path, str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
            raise ApiError(method, path, response.reason or "unexpected status", response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(method, path, "response is not valid JSON", response.status_code) from exc

    # Users -----------------------------------------------------------------

    def list_users(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "/users")
        return data if isinstance(data, list) else []

    # Expenses --------------------------------------------------------------

    def list_expenses(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "/expenses")
        return data if isinstance(data, list) else []

    def create_expense(self, expense: Union[Expense, Dict[str, Any]]) -> Any:
        payload = expense.to_record() if isinstance(expense, Expense) else dict(expense)
        return self._request("POST", "/expenses", json=payload)

    def update_expense(self, expense_id: Union[int, str], expense: Union[Expense, Dict[str, Any]]) -> Any:
        payload = expense.to_record() if isinstance(expense, Expense) else dict(expense)
        payload['id'] = expense_id
        return self._request("PUT", f"/expenses/{expense_id}", json=payload)

    def delete_expense(self, expense_id: Union[int, str]) -> None:
        self._request("DELETE", f"/expenses/{expense_id}")

    # Budgets ---------------------------------------------------------------

    def get_budgets(self) -> Dict[str, float]:
        return normalize_budgets(self._request("GET", "/budgets"))

    def replace_budgets(self, budgets: Dict[str, float]) -> Any:
        """Replace the entire budget map.

        There is no per-category endpoint, so two overlapping edits can
        overwrite each other.
        """
        return self._request("PUT", "/budgets", json=dict(budgets))

    def fetch_budgets_and_expenses(self) -> Tuple[Dict[str, float], List[Dict[str, Any]]]:
        """Fetch budgets and expenses concurrently; both must succeed.

        Both workers share ``self.session`` and only issue GETs.  Writes
        always run on the calling thread.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            budgets_future = pool.submit(self.get_budgets)
            expenses_future = pool.submit(self.list_expenses)
            return budgets_future.result(), expenses_future.result()
