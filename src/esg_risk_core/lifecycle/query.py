from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from esg_risk_core.domain import AlertCategory, AlertStatus, ComplianceAlert, Severity


class AlertSortKey(Enum):
    TITLE = "title"
    SEVERITY = "severity"
    DETECTED_AT = "detected_at"
    DUE_DATE = "due_date"


SORT_KEYS: dict[AlertSortKey, Callable[[ComplianceAlert], Any]] = {
    AlertSortKey.TITLE: lambda a: a.title.lower(),
    AlertSortKey.SEVERITY: lambda a: a.severity,
    AlertSortKey.DETECTED_AT: lambda a: a.detected_at,
    AlertSortKey.DUE_DATE: lambda a: a.due_date,
}


@dataclass(frozen=True, slots=True)
class AlertFilter:
    supplier_id: str | None = None
    severity: Severity | None = None
    category: AlertCategory | None = None
    status: AlertStatus | None = None
    detected_from: datetime | None = None
    detected_to: datetime | None = None

    def matches(self, alert: ComplianceAlert) -> bool:
        if self.supplier_id is not None and alert.supplier_id != self.supplier_id:
            return False
        if self.severity is not None and alert.severity is not self.severity:
            return False
        if self.category is not None and alert.category is not self.category:
            return False
        if self.status is not None and alert.status is not self.status:
            return False
        if self.detected_from is not None and alert.detected_at < self.detected_from:
            return False
        if self.detected_to is not None and alert.detected_at > self.detected_to:
            return False
        return True


def query_alerts(
    alerts: Iterable[ComplianceAlert],
    alert_filter: AlertFilter | None = None,
    sort_key: AlertSortKey = AlertSortKey.DETECTED_AT,
    descending: bool = True,
    limit: int | None = None,
) -> list[ComplianceAlert]:
    alert_filter = alert_filter or AlertFilter()
    selected = [a for a in alerts if alert_filter.matches(a)]
    selected.sort(key=SORT_KEYS[sort_key], reverse=descending)
    return selected[:limit] if limit is not None else selected
