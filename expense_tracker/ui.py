"""Navigation shell: page setup, theme, login gate and the navigation bar."""

from __future__ import annotations

import streamlit as st
from streamlit.errors import StreamlitAPIException

from .config import configure_logging
from .session import AppState, init_app_state, logout

# Home.py doubles as the login page and the dashboard
HOME_PAGE = "Home.py"
EXPENSES_PAGE = "pages/1_💸_Expenses.py"
BUDGET_PAGE = "pages/2_📋_Budget.py"
REPORTS_PAGE = "pages/3_📈_Reports.py"

NAV_LINKS = [
    (HOME_PAGE, "Dashboard", "📊"),
    (EXPENSES_PAGE, "Expenses", "💸"),
    (BUDGET_PAGE, "Budget", "📋"),
    (REPORTS_PAGE, "Reports", "📈"),
]

DARK_THEME_CSS = """
<style>
.stApp {
    background-color: #1f2937;
    color: #f9fafb;
}
[data-testid="stSidebar"] {
    background-color: #111827;
}
[data-testid="stMetric"] {
    background-color: #374151;
    padding: 1rem;
    border-radius: 0.5rem;
}
.stApp h1, .stApp h2, .stApp h3, .stApp label, .stApp p {
    color: #f9fafb;
}
</style>
"""


def setup_page(title: str, icon: str) -> AppState:
    """Configure the page and return the session's :class:`AppState`."""
    try:
        st.set_page_config(page_title=f"{title} · ExpenseTracker", page_icon=icon, layout="wide")
    except StreamlitAPIException:
        # Already configured upstream during this run.
        pass
    configure_logging()
    state = init_app_state()
    apply_theme(state)
    return state


def apply_theme(state: AppState) -> None:
    if state.theme == 'dark':
        st.markdown(DARK_THEME_CSS, unsafe_allow_html=True)


def require_login(state: AppState) -> None:
    """Send unauthenticated sessions to the login page."""
    if not state.authenticated:
        st.switch_page(HOME_PAGE)


def render_navbar(state: AppState) -> None:
    """Sidebar navigation with theme toggle and logout."""
    st.sidebar.markdown("## 💰 ExpenseTracker")
    if state.username:
        st.sidebar.caption(f"Signed in as **{state.username}**")
    for page, label, icon in NAV_LINKS:
        st.sidebar.page_link(page, label=label, icon=icon)

    st.sidebar.divider()
    toggle_label = "☀️ Light mode" if state.theme == 'dark' else "🌙 Dark mode"
    if st.sidebar.button(toggle_label, key="nav_toggle_theme", use_container_width=True):
        state.toggle_theme()
        st.rerun()

    if st.sidebar.button("🚪 Logout", key="nav_logout", use_container_width=True):
        logout(state)
        st.switch_page(HOME_PAGE)
