"""Monthly debts view."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import flet as ft

from ...domain.debt import Debt
from ...logging_config import get_logger
from ...services.month_view import (
    STATUS_OVERDUE,
    STATUS_PAID,
    debt_status,
    installment_label,
    summarize_month,
)
from .. import controllers
from ..components import build_stat_card, empty_state, format_money, safe_update
from ..components.debt_dialog import show_debt_dialog

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

_STATUS_COLORS = {
    STATUS_PAID: (ft.Colors.GREEN_50, ft.Colors.GREEN_200),
    STATUS_OVERDUE: (ft.Colors.RED_50, ft.Colors.RED_200),
}
_DEFAULT_COLORS = (ft.Colors.WHITE, ft.Colors.GREY_300)


def build_debt_card(ctx: AppContext, page: ft.Page, debt: Debt, *, today: date | None = None) -> ft.Container:
    """Render one debt with its paid/edit/delete actions."""

    status = debt_status(debt, today=today)
    bgcolor, border_color = _STATUS_COLORS.get(status, _DEFAULT_COLORS)
    symbol = ctx.config.CURRENCY_SYMBOL

    title_controls: list[ft.Control] = [ft.Text(debt.name, size=18, weight=ft.FontWeight.W_600)]
    position = installment_label(debt)
    if position:
        title_controls.append(
            ft.Container(
                content=ft.Text(f"Installment {position}", size=12, color=ft.Colors.BLUE_800),
                bgcolor=ft.Colors.BLUE_100,
                border_radius=12,
                padding=ft.padding.symmetric(horizontal=8, vertical=2),
            )
        )

    amount_text = format_money(debt.amount, symbol)
    if debt.is_recurring:
        amount_text += " (Recurring)"

    details = ft.Column(
        [
            ft.Row(title_controls, spacing=8, wrap=True),
            ft.Text(amount_text, color=ft.Colors.GREY_700),
            ft.Text(f"Due {debt.due_date.strftime('%d/%m/%Y')}", size=12, color=ft.Colors.GREY_600),
        ],
        spacing=4,
    )

    actions = ft.Row(
        [
            ft.IconButton(
                icon=ft.Icons.CHECK_CIRCLE,
                icon_color=ft.Colors.GREEN_600 if debt.is_paid else ft.Colors.GREY_400,
                tooltip="Mark unpaid" if debt.is_paid else "Mark paid",
                on_click=lambda _e, debt_id=debt.id: controllers.toggle_paid(ctx, page, debt_id),
            ),
            ft.IconButton(
                icon=ft.Icons.EDIT,
                icon_color=ft.Colors.BLUE_600,
                tooltip="Edit",
                on_click=lambda _e, debt_id=debt.id: show_debt_dialog(ctx, page, debt_id),
            ),
            ft.IconButton(
                icon=ft.Icons.DELETE,
                icon_color=ft.Colors.RED_600,
                tooltip="Delete",
                on_click=lambda _e, debt_id=debt.id: controllers.confirm_delete(ctx, page, debt_id),
            ),
        ],
        spacing=4,
    )

    return ft.Container(
        content=ft.Row([details, actions], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        bgcolor=bgcolor,
        border=ft.border.all(1, border_color),
        border_radius=12,
        padding=16,
        data=debt.id,
    )


def build_debts_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the month view: navigation, month total and the month's debts."""

    month_label_ref = ft.Ref[ft.Text]()
    total_ref = ft.Ref[ft.Text]()
    counts_ref = ft.Ref[ft.Text]()
    list_ref = ft.Ref[ft.Column]()

    def refresh(*_args) -> None:
        summary = summarize_month(ctx.store.snapshot, ctx.current_month)
        logger.debug(
            "Rendering month",
            extra={"month": summary.label, "records": len(summary.records)},
        )
        month_label_ref.current.value = summary.label
        total_ref.current.value = format_money(summary.total_due, ctx.config.CURRENCY_SYMBOL)
        counts_ref.current.value = (
            f"{len(summary.records)} debts · {summary.paid_count} paid · {summary.overdue_count} overdue"
        )
        if summary.is_empty:
            list_ref.current.controls = [empty_state("No debts due this month")]
        else:
            list_ref.current.controls = [build_debt_card(ctx, page, debt) for debt in summary.records]
        for ref in (month_label_ref, total_ref, counts_ref, list_ref):
            safe_update(ref.current)

    def _step(step: int) -> None:
        controllers.change_month(ctx, step)
        refresh()

    header = ft.Row(
        [
            ft.IconButton(icon=ft.Icons.CHEVRON_LEFT, tooltip="Previous month", on_click=lambda _: _step(-1)),
            ft.Text(ref=month_label_ref, size=22, weight=ft.FontWeight.BOLD),
            ft.IconButton(icon=ft.Icons.CHEVRON_RIGHT, tooltip="Next month", on_click=lambda _: _step(1)),
        ],
        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
    )

    total_card = build_stat_card(
        "Month total",
        "",
        icon=ft.Icons.ATTACH_MONEY,
        color=ft.Colors.BLUE_700,
        value_ref=total_ref,
    )

    content = ft.Column(
        [
            header,
            total_card,
            ft.Text(ref=counts_ref, size=12, color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Column(ref=list_ref, spacing=12),
        ],
        spacing=16,
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )

    appbar = ft.AppBar(
        leading=ft.Icon(ft.Icons.RECEIPT_LONG),
        title=ft.Text("DebtBook", size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=[
            ft.IconButton(
                icon=ft.Icons.ADD_CIRCLE,
                tooltip="New debt",
                on_click=lambda _: show_debt_dialog(ctx, page),
            ),
            ft.IconButton(
                icon=ft.Icons.SAVE_ALT,
                tooltip="Export backup",
                on_click=lambda _: controllers.export_backup(ctx, page),
            ),
            ft.IconButton(
                icon=ft.Icons.TABLE_VIEW,
                tooltip="Export CSV",
                on_click=lambda _: controllers.export_csv(ctx, page),
            ),
            ft.IconButton(
                icon=ft.Icons.UPLOAD_FILE,
                tooltip="Import backup",
                on_click=lambda _: controllers.pick_backup_file(ctx, page),
            ),
        ],
    )

    refresh()
    ctx.store.subscribe(refresh)

    return ft.View(
        route="/",
        appbar=appbar,
        controls=[ft.Container(content=content, padding=24, expand=True)],
        padding=0,
    )
