"""Page bodies for the expense tracker.

Each module exposes a ``render`` function that the thin scripts under
``pages/`` call after the login gate, plus the small non-UI handlers
(loading, saving, validation) that those renderers use.
"""

from . import budget, dashboard, expenses, login, reports  # noqa: F401

__all__ = ['budget', 'dashboard', 'expenses', 'login', 'reports']
