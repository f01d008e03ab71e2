"""Top-level package for the Expense Tracker.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``api_client`` – the REST accessor for users, expenses and budgets
* ``analytics`` – pure aggregation helpers over expenses and budgets
* ``exporters`` – CSV and PDF report generation
* ``visualization`` – functions that generate Plotly figures

To run the app from the command line you can execute:

```bash
python run_app.py
```

which starts ``streamlit run Home.py`` from inside this package so that
the ``pages/`` directory is discovered.
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import exporters  # noqa: F401  # re-exported for convenience
from .api_client import ApiError, ExpenseAPI  # noqa: F401

__all__ = ["analytics", "exporters", "ApiError", "ExpenseAPI"]
