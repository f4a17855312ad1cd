from typing import Protocol, Self, runtime_checkable

from esg_risk_core.domain import SupplierSnapshot


@runtime_checkable
class SupplierInput(Protocol):
    """Protocol for async supplier snapshot sources."""

    def __aiter__(self) -> Self:
        ...

    async def __anext__(self) -> SupplierSnapshot:
        ...
