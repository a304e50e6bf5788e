"""JSON record-array backups of the debt list.

The file is a plain JSON array of debt objects keyed like the original web
app's saved list (``dueDate``, ``isPaid``...), so a list copied out of that
app imports as-is.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from ..config import BaseConfig
from ..domain.debt import Debt
from ..logging_config import get_logger

logger = get_logger(__name__)

BACKUP_PATTERN = "debtbook_backup_*.json"


class BackupFormatError(ValueError):
    """Raised when a backup file cannot be turned into debt records."""


def dumps_debts(records: Iterable[Debt]) -> str:
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def loads_debts(text: str) -> list[Debt]:
    """Parse a JSON record array; every entry must be valid and ids unique."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BackupFormatError(f"Backup is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise BackupFormatError("Backup must contain a JSON array of debts")

    records: list[Debt] = []
    seen: set[str] = set()
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise BackupFormatError(f"Entry {index} is not an object")
        try:
            record = Debt.from_dict(entry)
        except (TypeError, ValueError) as exc:
            raise BackupFormatError(f"Entry {index}: {exc}") from exc
        if record.id in seen:
            raise BackupFormatError(f"Entry {index}: duplicate id {record.id!r}")
        seen.add(record.id)
        records.append(record)
    return records


def export_debts_json(*, records: Iterable[Debt], output_path: Path) -> Path:
    """Write ``records`` to ``output_path`` and return the path written."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_debts(records) + "\n", encoding="utf-8")
    return output_path


def import_debts_json(path: Path) -> list[Debt]:
    """Read a backup file written by :func:`export_debts_json` (or the web app)."""

    if not path.exists():
        raise FileNotFoundError(f"Backup file not found: {path}")
    return loads_debts(path.read_text(encoding="utf-8"))


def _ensure_secure_directory(directory: Path) -> None:
    """Create the directory and set restrictive permissions when possible."""

    directory.mkdir(parents=True, exist_ok=True)
    try:
        os.chmod(directory, 0o700)
    except (NotImplementedError, PermissionError):  # pragma: no cover - platform specific
        pass


def _prune_old_backups(directory: Path, keep: int) -> None:
    """Remove backups beyond the retention count, newest kept."""

    backups = sorted(directory.glob(BACKUP_PATTERN), key=lambda file: file.name, reverse=True)
    for old in backups[keep:]:
        try:
            old.unlink()
        except OSError:  # pragma: no cover - best-effort cleanup
            logger.warning("Could not prune backup", extra={"path": str(old)})


def run_backup(
    records: Iterable[Debt],
    *,
    config: Optional[BaseConfig] = None,
    output_dir: Optional[Path] = None,
    retention: Optional[int] = None,
) -> Path:
    """Write a timestamped backup into the export directory and prune old ones."""

    config = config or BaseConfig()
    out_dir = Path(output_dir) if output_dir is not None else config.export_dir
    _ensure_secure_directory(out_dir)

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    path = export_debts_json(records=records, output_path=out_dir / f"debtbook_backup_{stamp}.json")
    _prune_old_backups(out_dir, keep=retention if retention is not None else config.EXPORT_RETENTION)
    logger.info("Backup written", extra={"path": str(path)})
    return path


__all__ = [
    "BackupFormatError",
    "dumps_debts",
    "export_debts_json",
    "import_debts_json",
    "loads_debts",
    "run_backup",
]
