"""Dev-mode diagnostics routed through the ``debtbook.dev`` logger."""

from __future__ import annotations

from typing import Any, Mapping

from .config import BaseConfig
from .logging_config import get_logger

_dev_logger = get_logger("dev")


def in_dev_mode(config: BaseConfig | None) -> bool:
    return bool(getattr(config, "DEV_MODE", False)) if config is not None else False


def dev_log(
    config: BaseConfig | None,
    message: str,
    *,
    exc: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Record a developer diagnostic; silent unless DEV_MODE is on.

    ``context`` is attached to the record as extra fields so it lands in the
    JSON log file, and ``exc`` adds the traceback.
    """

    if not in_dev_mode(config):
        return

    extra = {f"dev_{key}": value for key, value in (context or {}).items()}
    exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
    _dev_logger.info("[DEV] %s", message, extra=extra, exc_info=exc_info)
