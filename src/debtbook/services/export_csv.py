"""CSV export helpers for DebtBook."""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from ..domain.debt import FIELD_NAMES, Debt


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def export_debts_csv(*, records: Iterable[Debt], output_path: Path) -> Path:
    """Write debts to CSV at `output_path`.

    Columns follow the record-array field names (id, name, amount,
    installments, currentInstallment, dueDate, isRecurring, isPaid, createdAt).
    Returns the path written.
    """

    headers = list(FIELD_NAMES)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # newline='' keeps the csv module in charge of line endings
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for record in records:
            writer.writerow(
                {key: _serialize_value(getattr(record, attr)) for key, attr in FIELD_NAMES.items()}
            )

    return output_path
