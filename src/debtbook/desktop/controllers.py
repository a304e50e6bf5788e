"""Controller helpers for the desktop actions."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable

import flet as ft
from sqlalchemy.exc import SQLAlchemyError

from ..devtools import dev_log
from ..logging_config import get_logger
from ..services import backup
from ..services.export_csv import export_debts_csv
from .components import show_confirm_dialog, show_error_dialog, show_snack

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

# Failures a persistence write can surface to the user
PERSISTENCE_ERRORS = (SQLAlchemyError, OSError)


def _run_mutation(ctx: AppContext, page: ft.Page, label: str, action: Callable[[], object]) -> bool:
    """Run a store mutation, reporting save failures instead of crashing the UI."""

    try:
        action()
    except PERSISTENCE_ERRORS as exc:
        logger.error("Debt change could not be saved", extra={"action": label, "error": str(exc)})
        dev_log(ctx.config, f"{label} failed", exc=exc)
        show_error_dialog(page, "Could not save", f"Your change was not saved: {exc}")
        return False
    dev_log(ctx.config, label)
    return True


def change_month(ctx: AppContext, step: int) -> None:
    ctx.shift_month(step)
    logger.info("Month changed", extra={"month": ctx.current_month.isoformat()})


def toggle_paid(ctx: AppContext, page: ft.Page, debt_id: str) -> bool:
    return _run_mutation(ctx, page, "Toggle paid", lambda: ctx.store.toggle_paid(debt_id))


def delete_debt(ctx: AppContext, page: ft.Page, debt_id: str) -> bool:
    return _run_mutation(ctx, page, "Delete debt", lambda: ctx.store.remove(debt_id))


def confirm_delete(ctx: AppContext, page: ft.Page, debt_id: str) -> None:
    """Ask before deleting a record."""

    record = ctx.store.get(debt_id)
    if record is None:
        return

    def _confirmed() -> None:
        if delete_debt(ctx, page, debt_id):
            show_snack(page, f"Deleted {record.name}")

    show_confirm_dialog(page, "Delete debt", f"Delete '{record.name}'?", on_confirm=_confirmed)


def export_backup(ctx: AppContext, page: ft.Page) -> Path | None:
    """Write a JSON backup of every debt into the export directory."""

    try:
        path = backup.run_backup(ctx.store.snapshot, config=ctx.config)
    except OSError as exc:
        logger.error("Backup failed", extra={"error": str(exc)})
        show_error_dialog(page, "Backup failed", str(exc))
        return None
    show_snack(page, f"Backup written: {path}")
    return path


def export_csv(ctx: AppContext, page: ft.Page) -> Path | None:
    """Write every debt to a CSV file in the export directory."""

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    output_path = ctx.config.export_dir / f"debts-{stamp}.csv"
    try:
        export_debts_csv(records=ctx.store.snapshot, output_path=output_path)
    except OSError as exc:
        logger.error("CSV export failed", extra={"error": str(exc)})
        show_error_dialog(page, "Export failed", str(exc))
        return None
    logger.info("CSV export written", extra={"path": str(output_path)})
    show_snack(page, f"CSV written: {output_path}")
    return output_path


def import_backup(ctx: AppContext, page: ft.Page, path: Path) -> bool:
    """Replace every debt with the contents of a JSON backup."""

    try:
        records = backup.import_debts_json(path)
    except (backup.BackupFormatError, OSError) as exc:
        logger.warning("Backup import rejected", extra={"path": str(path), "error": str(exc)})
        show_error_dialog(page, "Import failed", str(exc))
        return False
    if not _run_mutation(ctx, page, "Import backup", lambda: ctx.store.reset(records)):
        return False
    show_snack(page, f"Imported {len(records)} debts")
    return True


def attach_file_picker(ctx: AppContext, page: ft.Page) -> ft.FilePicker:
    """Create and attach the file picker used for backup imports."""

    def _picked(e: ft.FilePickerResultEvent) -> None:
        selected = e.files[0] if e.files else None
        if not selected or not selected.path:
            dev_log(ctx.config, "File picker dismissed")
            return
        import_backup(ctx, page, Path(selected.path))

    picker = ft.FilePicker(on_result=_picked)
    page.overlay.append(picker)
    ctx.file_picker = picker
    return picker


def pick_backup_file(ctx: AppContext, page: ft.Page) -> None:
    picker = ctx.file_picker or attach_file_picker(ctx, page)
    picker.pick_files(
        dialog_title="Import debts backup",
        allowed_extensions=["json"],
        allow_multiple=False,
    )
