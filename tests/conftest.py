import types

import pytest

from expense_tracker import notifications


@pytest.fixture
def toasts(monkeypatch):
    """Capture toast notifications instead of sending them to Streamlit."""
    captured = []

    def fake_toast(message, icon=None):
        captured.append(message)

    monkeypatch.setattr(notifications, 'st', types.SimpleNamespace(toast=fake_toast))
    return captured
