"""Main entry point for the Streamlit multi-page app.

Unauthenticated sessions see the login form; once logged in this page
renders the dashboard.  Pages in the pages/ directory appear in the
sidebar navigation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from expense_tracker.session import get_api
from expense_tracker.ui import render_navbar, setup_page
from expense_tracker.views import dashboard, login


def main() -> None:
    state = setup_page("Dashboard", "📊")
    api = get_api()

    if not state.authenticated:
        if login.render(api, state):
            st.rerun()
        return

    render_navbar(state)
    st.header("📊 Dashboard")
    dashboard.render(api, state)


main()
