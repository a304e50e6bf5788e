"""Dialog components for the desktop app."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft


def _refresh(page: ft.Page) -> None:
    try:
        page.update()
    except AssertionError:
        pass


def show_error_dialog(page: ft.Page, title: str, message: str) -> None:
    """Show an error dialog."""

    def close_dialog(_e):
        dialog.open = False
        _refresh(page)

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[ft.TextButton("OK", on_click=close_dialog)],
    )

    page.dialog = dialog
    dialog.open = True
    _refresh(page)


def show_confirm_dialog(
    page: ft.Page,
    title: str,
    message: str,
    on_confirm: Callable[[], None],
    on_cancel: Optional[Callable[[], None]] = None,
) -> ft.AlertDialog:
    """Show a confirmation dialog."""

    def handle_confirm(_e):
        dialog.open = False
        _refresh(page)
        on_confirm()

    def handle_cancel(_e):
        dialog.open = False
        _refresh(page)
        if on_cancel:
            on_cancel()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton("Cancel", on_click=handle_cancel),
            ft.FilledButton("Confirm", on_click=handle_confirm),
        ],
    )

    page.dialog = dialog
    dialog.open = True
    _refresh(page)
    return dialog


def show_snack(page: ft.Page, message: str, *, bgcolor: Optional[str] = None) -> None:
    """Display a snack bar message."""

    page.snack_bar = ft.SnackBar(content=ft.Text(message), bgcolor=bgcolor)
    page.snack_bar.open = True
    _refresh(page)
