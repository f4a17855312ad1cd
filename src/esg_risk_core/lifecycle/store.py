from typing import Protocol, runtime_checkable

from esg_risk_core.domain import AlertCategory, AlertStatus, ComplianceAlert


@runtime_checkable
class AlertStore(Protocol):
    """Protocol for alert persistence used by the lifecycle service."""

    async def get(self, alert_id: str) -> ComplianceAlert | None:
        ...

    async def add(self, alert: ComplianceAlert) -> None:
        ...

    async def replace(self, alert: ComplianceAlert, expected_version: int) -> bool:
        ...

    async def find_open(self, supplier_id: str, category: AlertCategory) -> ComplianceAlert | None:
        ...

    async def all(self) -> list[ComplianceAlert]:
        ...


class InMemoryAlertStore:
    """Dict-backed store with optimistic version checks."""

    def __init__(self, alerts: list[ComplianceAlert] | None = None) -> None:
        self._alerts: dict[str, ComplianceAlert] = {a.id: a for a in alerts or []}

    async def get(self, alert_id: str) -> ComplianceAlert | None:
        return self._alerts.get(alert_id)

    async def add(self, alert: ComplianceAlert) -> None:
        if alert.id in self._alerts:
            raise ValueError(f"Alert {alert.id} already exists")
        self._alerts[alert.id] = alert

    async def replace(self, alert: ComplianceAlert, expected_version: int) -> bool:
        current = self._alerts.get(alert.id)
        if current is None or current.version != expected_version:
            return False
        self._alerts[alert.id] = alert
        return True

    async def find_open(self, supplier_id: str, category: AlertCategory) -> ComplianceAlert | None:
        for alert in self._alerts.values():
            if (
                alert.supplier_id == supplier_id
                and alert.category == category
                and alert.status is AlertStatus.OPEN
                and alert.record.is_active
            ):
                return alert
        return None

    async def all(self) -> list[ComplianceAlert]:
        return [a for a in self._alerts.values() if a.record.is_active]

    def __len__(self) -> int:
        return len(self._alerts)
