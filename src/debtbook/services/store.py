"""In-memory debt store with snapshot semantics."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional, Union

from ..domain.debt import Debt
from ..logging_config import get_logger

logger = get_logger(__name__)

Snapshot = tuple[Debt, ...]
ChangeCallback = Callable[[Snapshot], None]


class DebtStore:
    """Owns the debt list.

    The list is an immutable tuple; each effective mutation swaps in a new
    tuple, hands it to ``on_change`` (the persistence save) and then notifies
    subscribers. Mutations addressing an unknown id leave the snapshot
    untouched and save nothing.
    """

    def __init__(
        self,
        records: Iterable[Debt] = (),
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        self._snapshot: Snapshot = tuple(records)
        self._on_change = on_change
        self._subscribers: list[ChangeCallback] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def records(self) -> list[Debt]:
        return list(self._snapshot)

    def __len__(self) -> int:
        return len(self._snapshot)

    def __iter__(self) -> Iterator[Debt]:
        return iter(self._snapshot)

    def get(self, debt_id: str) -> Optional[Debt]:
        for record in self._snapshot:
            if record.id == debt_id:
                return record
        return None

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register ``callback`` for new snapshots; returns an unsubscribe function."""

        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def add(self, records: Union[Debt, Iterable[Debt]]) -> Snapshot:
        """Append one record or a batch to the end of the list."""

        batch = (records,) if isinstance(records, Debt) else tuple(records)
        if not batch:
            return self._snapshot
        self._commit(self._snapshot + batch, "add", count=len(batch))
        return self._snapshot

    def replace(self, debt_id: str, new_record: Debt) -> Snapshot:
        """Substitute the record with ``debt_id``; unknown ids are ignored."""

        if self.get(debt_id) is None:
            return self._snapshot
        updated = tuple(new_record if record.id == debt_id else record for record in self._snapshot)
        self._commit(updated, "replace", debt_id=debt_id)
        return self._snapshot

    def remove(self, debt_id: str) -> Snapshot:
        """Drop the record with ``debt_id``; unknown ids are ignored."""

        if self.get(debt_id) is None:
            return self._snapshot
        remaining = tuple(record for record in self._snapshot if record.id != debt_id)
        self._commit(remaining, "remove", debt_id=debt_id)
        return self._snapshot

    def set_paid(self, debt_id: str, paid: bool) -> Snapshot:
        """Set the paid flag, leaving every other field untouched."""

        current = self.get(debt_id)
        if current is None:
            return self._snapshot
        updated = tuple(
            record.evolve(is_paid=paid) if record.id == debt_id else record
            for record in self._snapshot
        )
        self._commit(updated, "set_paid", debt_id=debt_id, paid=paid)
        return self._snapshot

    def toggle_paid(self, debt_id: str) -> Snapshot:
        current = self.get(debt_id)
        if current is None:
            return self._snapshot
        return self.set_paid(debt_id, not current.is_paid)

    def reset(self, records: Iterable[Debt]) -> Snapshot:
        """Replace the whole list, e.g. after importing a backup."""

        self._commit(tuple(records), "reset")
        return self._snapshot

    def _commit(self, new_snapshot: Snapshot, action: str, **context: object) -> None:
        previous = self._snapshot
        self._snapshot = new_snapshot
        if self._on_change is not None:
            try:
                self._on_change(new_snapshot)
            except Exception:
                self._snapshot = previous
                logger.exception("Saving debts failed; change rolled back", extra={"action": action})
                raise
        logger.info(
            "Debt store updated",
            extra={"action": action, "size": len(new_snapshot), **context},
        )
        for callback in list(self._subscribers):
            callback(new_snapshot)


__all__ = ["DebtStore", "Snapshot"]
