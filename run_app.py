#!/usr/bin/env python3
"""Direct launcher for the Expense Tracker.

This script launches Streamlit with the expense_tracker directory as the app root,
enabling automatic page discovery from the pages/ subdirectory.
"""

import os
import subprocess
import sys
from pathlib import Path

# Get the project root and expense_tracker directory
project_root = Path(__file__).parent.resolve()
app_dir = project_root / "expense_tracker"

if __name__ == "__main__":
    # Change to expense_tracker directory so Streamlit can discover pages/
    os.chdir(app_dir)
    # Add project root to path for imports
    sys.path.insert(0, str(project_root))
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        "Home.py",
        *sys.argv[1:],
    ])
