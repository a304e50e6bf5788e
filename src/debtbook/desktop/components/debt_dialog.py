"""Debt add/edit dialog."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ...logging_config import get_logger
from ...services.debts import FormValidationError, submit_debt_form
from ...services.forms import DebtForm
from ..controllers import PERSISTENCE_ERRORS
from .dialogs import show_error_dialog, show_snack
from .widgets import safe_update

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def show_debt_dialog(
    ctx: AppContext,
    page: ft.Page,
    debt_id: Optional[str] = None,
    on_save_callback: Optional[Callable[[], None]] = None,
) -> ft.AlertDialog:
    """Show the create or edit debt dialog.

    Args:
        ctx: Application context
        page: Flet page
        debt_id: Record to edit, or None to create new debts
        on_save_callback: Called after a successful save
    """
    editing = ctx.store.get(debt_id) if debt_id else None
    ctx.editing_id = editing.id if editing else None
    initial = DebtForm.from_debt(editing) if editing else DebtForm()

    name_field = ft.TextField(
        label="Name *",
        value=initial.raw_data.get("name", ""),
        hint_text="e.g. Credit card",
        autofocus=True,
        width=400,
    )
    amount_field = ft.TextField(
        label="Amount *",
        value=initial.raw_data.get("amount", ""),
        hint_text="0.00",
        prefix_text=f"{ctx.config.CURRENCY_SYMBOL} ",
        keyboard_type=ft.KeyboardType.NUMBER,
        width=190,
    )
    installments_field = ft.TextField(
        label="Installments *",
        value=initial.raw_data.get("installments", "1") if editing else "1",
        keyboard_type=ft.KeyboardType.NUMBER,
        # A series is never regenerated from the edit dialog
        disabled=editing is not None,
        width=190,
    )
    due_date_field = ft.TextField(
        label="Due date *",
        value=initial.raw_data.get("due_date", "") if editing else date.today().isoformat(),
        hint_text="YYYY-MM-DD",
        width=190,
    )
    recurring_checkbox = ft.Checkbox(
        label="Recurring charge",
        value=initial.is_recurring,
        disabled=editing is not None and editing.is_installment,
    )

    fields = {
        "name": name_field,
        "amount": amount_field,
        "installments": installments_field,
        "due_date": due_date_field,
    }

    def _close() -> None:
        ctx.editing_id = None
        dialog.open = False
        page.update()

    def _validate_and_save(_):
        for field in fields.values():
            field.error_text = None

        form = DebtForm.from_mapping(
            {
                "name": name_field.value,
                "amount": amount_field.value,
                "installments": installments_field.value,
                "due_date": due_date_field.value,
                "is_recurring": recurring_checkbox.value,
            }
        )
        try:
            created = submit_debt_form(ctx.store, form, editing_id=ctx.editing_id)
        except FormValidationError as exc:
            for key, messages in exc.errors.items():
                control = fields.get(key)
                if control is not None:
                    control.error_text = " ".join(messages)
                    safe_update(control)
            return
        except PERSISTENCE_ERRORS as exc:
            logger.error("Failed to save debt", extra={"error": str(exc)})
            _close()
            show_error_dialog(page, "Could not save", f"Your change was not saved: {exc}")
            return

        if editing is not None:
            message = "Debt updated" if created else "Debt no longer exists"
        elif len(created) > 1:
            message = f"Added {len(created)} installments"
        else:
            message = "Debt added"
        _close()
        show_snack(page, message)
        if on_save_callback:
            on_save_callback()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("Edit debt" if editing else "New debt"),
        content=ft.Container(
            content=ft.Column(
                controls=[
                    name_field,
                    ft.Row([amount_field, installments_field], spacing=10),
                    due_date_field,
                    recurring_checkbox,
                ],
                tight=True,
                spacing=12,
            ),
            width=420,
        ),
        actions=[
            ft.TextButton("Cancel", on_click=lambda _: _close()),
            ft.ElevatedButton(
                "Save" if editing else "Add",
                icon=ft.Icons.SAVE,
                on_click=_validate_and_save,
            ),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )

    page.dialog = dialog
    dialog.open = True
    page.update()
    return dialog
