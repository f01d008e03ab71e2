"""Transient user-facing notifications."""

from __future__ import annotations

import logging

import streamlit as st

logger = logging.getLogger(__name__)

_ICONS = {
    'success': '✅',
    'error': '❌',
    'info': 'ℹ️',
}


def notify(message: str, kind: str = 'info') -> None:
    """Show a toast that disappears on its own."""
    if kind == 'error':
        logger.warning(message)
    else:
        logger.info(message)
    st.toast(message, icon=_ICONS.get(kind, _ICONS['info']))


def notify_success(message: str) -> None:
    notify(message, 'success')


def notify_error(message: str) -> None:
    notify(message, 'error')
