from datetime import datetime
from typing import Protocol, runtime_checkable

from esg_risk_core.domain import SupplierSnapshot


@runtime_checkable
class MetricSelector(Protocol):
    """Protocol for named numeric metrics resolved from a supplier snapshot."""

    @property
    def name(self) -> str:
        ...

    def resolve(self, snapshot: SupplierSnapshot, now: datetime) -> float | None:
        ...
