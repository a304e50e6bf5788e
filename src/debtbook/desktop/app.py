"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..config import BaseConfig
from ..devtools import dev_log
from ..logging_config import session_log_path, setup_logging
from . import controllers
from .context import create_app_context
from .views.debts import build_debts_view


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    config = BaseConfig()
    logger = setup_logging(config)
    logger.info("DebtBook desktop application starting")

    ctx = create_app_context(config)
    ctx.page = page

    def on_page_close(_):
        slp = session_log_path()
        logger.info("Application closing", extra={"session_log": str(slp) if slp else None})

    page.on_close = on_page_close

    page.title = "DebtBook (DEV)" if ctx.dev_mode else "DebtBook"
    if ctx.dev_mode:
        dev_log(ctx.config, "Dev mode enabled", context={"data_dir": ctx.config.DATA_DIR})
    page.theme_mode = ctx.theme_mode
    page.padding = 0
    page.window_width = 900
    page.window_height = 760
    page.window_min_width = 480
    page.window_min_height = 560

    controllers.attach_file_picker(ctx, page)

    def _on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
        logger.error("Flet page error", extra={"data": getattr(e, "data", None)})

    page.on_error = _on_error

    page.views.clear()
    page.views.append(build_debts_view(ctx, page))
    page.update()


def run() -> None:
    """Console-script entry point."""

    ft.app(target=main)


if __name__ == "__main__":
    run()
