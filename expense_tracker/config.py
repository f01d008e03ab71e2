"""Configuration management for the expense tracker.

This module centralizes all configuration values including the REST
endpoint, request timeout, logging level and the fixed category list.
Environment variables override the defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Sample json-server database shipped with the project
SAMPLE_DB_PATH = _PROJECT_ROOT / "data" / "db.json"

# Remote data endpoint
API_BASE_URL = os.getenv("EXPENSE_TRACKER_API_URL", "http://localhost:3001").rstrip("/")
API_TIMEOUT = float(os.getenv("EXPENSE_TRACKER_API_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper()

CURRENCY_SYMBOL = "₹"

CATEGORIES: List[str] = [
    "Food",
    "Utilities",
    "Entertainment",
    "Transportation",
    "Shopping",
    "Healthcare",
    "Education",
]

ALL_CATEGORIES_LABEL = "All"

# Budget status thresholds, in percent of the ceiling
WARNING_THRESHOLD = 75
DANGER_THRESHOLD = 90

# Placeholder ratio used for the "previous month" comparison on the dashboard
PREVIOUS_MONTH_PLACEHOLDER_RATIO = 0.8

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo123"

_LOGGING_CONFIGURED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once per process."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _LOGGING_CONFIGURED = True
