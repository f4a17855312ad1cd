from collections.abc import Iterable

from esg_risk_core.domain import SupplierSnapshot


class ManualSupplierInput:
    """In-process supplier source, keyed by supplier id.

    A supplier is scanned once per pass: adding a snapshot for a known
    supplier replaces the earlier one in place. ``rewind`` starts another
    pass over the current snapshots, for callers that rescan on a schedule.
    """

    def __init__(self, snapshots: Iterable[SupplierSnapshot] = ()) -> None:
        self._snapshots: dict[str, SupplierSnapshot] = {}
        for snapshot in snapshots:
            self.add(snapshot)
        self._pending: list[SupplierSnapshot] | None = None

    def add(self, snapshot: SupplierSnapshot) -> None:
        self._snapshots[snapshot.supplier_id] = snapshot

    def remove(self, supplier_id: str) -> SupplierSnapshot | None:
        return self._snapshots.pop(supplier_id, None)

    def rewind(self) -> None:
        self._pending = None

    def __contains__(self, supplier_id: object) -> bool:
        return supplier_id in self._snapshots

    @property
    def supplier_count(self) -> int:
        return len(self._snapshots)

    def __aiter__(self) -> "ManualSupplierInput":
        return self

    async def __anext__(self) -> SupplierSnapshot:
        if self._pending is None:
            self._pending = list(self._snapshots.values())
            self._pending.reverse()
        if not self._pending:
            raise StopAsyncIteration
        return self._pending.pop()
