"""Reusable UI components for the desktop app."""

from .dialogs import show_confirm_dialog, show_error_dialog, show_snack
from .widgets import build_stat_card, empty_state, format_money, safe_update

__all__ = [
    "build_stat_card",
    "empty_state",
    "format_money",
    "safe_update",
    "show_confirm_dialog",
    "show_error_dialog",
    "show_snack",
]
