"""Application state for one browser session.

The theme and the authenticated flag live in a single :class:`AppState`
object stored in ``st.session_state``.  Streamlit drops session state on
reload, so a refreshed tab always starts logged out with the light theme.

Authentication is a demo gate only: the full user list is fetched and
compared in plaintext on the client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, MutableMapping, Optional

import streamlit as st

from .api_client import ApiError, ExpenseAPI
from .notifications import notify_error, notify_success

logger = logging.getLogger(__name__)

STATE_KEY = 'app_state'
API_KEY = 'expense_api'

THEMES = ('light', 'dark')


@dataclass
class AppState:
    theme: str = 'light'
    authenticated: bool = False
    username: Optional[str] = None

    def toggle_theme(self) -> str:
        self.theme = 'dark' if self.theme == 'light' else 'light'
        return self.theme

    def mark_logged_in(self, username: str) -> None:
        self.authenticated = True
        self.username = username

    def reset_on_logout(self) -> None:
        """Return to the logged-out state; the theme is a display preference and survives."""
        self.authenticated = False
        self.username = None


def _session(session_state: Optional[MutableMapping[str, Any]]) -> MutableMapping[str, Any]:
    return st.session_state if session_state is None else session_state


def init_app_state(session_state: Optional[MutableMapping[str, Any]] = None) -> AppState:
    """Create the session's :class:`AppState` on first use and return it."""
    store = _session(session_state)
    state = store.get(STATE_KEY)
    if not isinstance(state, AppState):
        state = AppState()
        store[STATE_KEY] = state
    return state


def get_api(session_state: Optional[MutableMapping[str, Any]] = None) -> ExpenseAPI:
    """One :class:`ExpenseAPI` (and HTTP connection pool) per browser session."""
    store = _session(session_state)
    api = store.get(API_KEY)
    if api is None:
        api = ExpenseAPI()
        store[API_KEY] = api
    return api


def authenticate(users: Iterable[Dict[str, Any]], username: str, password: str) -> bool:
    """Plaintext match of ``username``/``password`` against the user records."""
    for user in users or []:
        if user.get('username') == username and user.get('password') == password:
            return True
    return False


def login(api: ExpenseAPI, state: AppState, username: str, password: str) -> bool:
    """Check credentials against ``GET /users`` and update ``state``.

    Emits a success or failure notification either way.
    """
    try:
        users = api.list_users()
    except ApiError as exc:
        logger.warning("Login lookup failed: %s", exc)
        notify_error('Login failed')
        return False

    if authenticate(users, username, password):
        state.mark_logged_in(username)
        logger.info("User %s logged in", username)
        notify_success('Login successful!')
        return True

    notify_error('Invalid credentials')
    return False


def logout(state: AppState) -> None:
    logger.info("User %s logged out", state.username)
    state.reset_on_logout()
