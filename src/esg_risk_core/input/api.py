from typing import Any

from esg_risk_core.api.client import ESGMonitoringClient
from esg_risk_core.api.convert import supplier_from_payload
from esg_risk_core.domain import SupplierSnapshot


class ApiSupplierInput:
    """SupplierInput adapter over the ESG Monitoring API.

    Fetches all active suppliers on first iteration.

    Usage:
        async with ESGMonitoringClient(base_url, api_key) as client:
            async for snapshot in ApiSupplierInput(client):
                ...

    For testing, inject payloads via the from_payloads() class method.
    """

    def __init__(self, client: ESGMonitoringClient) -> None:
        self._client = client
        self._snapshots: list[SupplierSnapshot] = []
        self._index: int = 0
        self._fetched: bool = False

    @classmethod
    def from_payloads(cls, payloads: list[dict[str, Any]]) -> "ApiSupplierInput":
        instance = cls.__new__(cls)
        instance._client = None  # type: ignore[assignment]
        instance._snapshots = [supplier_from_payload(p) for p in payloads]
        instance._index = 0
        instance._fetched = True
        return instance

    def __aiter__(self) -> "ApiSupplierInput":
        return self

    async def __anext__(self) -> SupplierSnapshot:
        if not self._fetched:
            self._snapshots = await self._client.list_active_suppliers()
            self._fetched = True

        if self._index >= len(self._snapshots):
            raise StopAsyncIteration

        snapshot = self._snapshots[self._index]
        self._index += 1
        return snapshot

    async def refresh(self) -> None:
        """Fetch fresh suppliers from the API (for polling scenarios)."""
        self._snapshots = await self._client.list_active_suppliers()
        self._fetched = True
        self._index = 0

    @property
    def supplier_count(self) -> int:
        return len(self._snapshots)
