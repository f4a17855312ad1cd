from typing import Protocol, runtime_checkable

from esg_risk_core.domain import ComplianceAlert


@runtime_checkable
class AlertOutput(Protocol):
    """Protocol for destinations of newly admitted alerts."""

    @property
    def name(self) -> str:
        ...

    async def send(self, alert: ComplianceAlert) -> None:
        ...
