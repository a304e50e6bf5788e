"""Reusable widget components for the desktop app."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

import flet as ft


def safe_update(control: ft.Control | None) -> None:
    """Update a control only when it is mounted on a page."""

    if control is None:
        return
    if getattr(control, "page", None) is None:
        return
    try:
        control.update()
    except AssertionError:
        pass  # detached between the check and the update


def format_money(amount: Decimal, symbol: str = "R$") -> str:
    return f"{symbol} {amount:,.2f}"


def build_stat_card(
    label: str,
    value: str,
    icon: Optional[str] = None,
    color: Optional[str] = None,
    value_ref: Optional[ft.Ref[ft.Text]] = None,
) -> ft.Card:
    """Build a statistic card."""

    value_text = ft.Text(value, size=28, weight=ft.FontWeight.BOLD, color=color, ref=value_ref)
    label_text = ft.Text(label, size=14, color=ft.Colors.ON_SURFACE_VARIANT)
    content_column = ft.Column(
        [value_text, label_text],
        spacing=4,
        horizontal_alignment=ft.CrossAxisAlignment.START,
    )

    if icon:
        card_content: ft.Control = ft.Row(
            [
                ft.Icon(icon, size=36, color=color or ft.Colors.PRIMARY),
                ft.Container(width=12),
                content_column,
            ],
            alignment=ft.MainAxisAlignment.START,
        )
    else:
        card_content = content_column

    return ft.Card(content=ft.Container(content=card_content, padding=20), elevation=2)


def empty_state(message: str) -> ft.Container:
    """Simple empty-state placeholder."""

    return ft.Container(
        content=ft.Column(
            [
                ft.Icon(ft.Icons.INBOX, size=40, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=40,
        alignment=ft.alignment.center,
    )
