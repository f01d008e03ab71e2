"""Login view."""

from __future__ import annotations

import streamlit as st

from ..api_client import ExpenseAPI
from ..config import DEMO_PASSWORD, DEMO_USERNAME
from ..session import AppState, login


def render(api: ExpenseAPI, state: AppState) -> bool:
    """Render the login form; returns True once the session is authenticated."""
    _, center, _ = st.columns([1, 1, 1])
    with center:
        st.title("Expense Tracker")
        with st.form("login_form"):
            username = st.text_input("Username", placeholder="Username")
            password = st.text_input("Password", type="password", placeholder="Password")
            submitted = st.form_submit_button("Login", use_container_width=True)
        st.caption(f"Demo credentials: username: {DEMO_USERNAME}, password: {DEMO_PASSWORD}")

    if submitted:
        return login(api, state, username, password)
    return state.authenticated
