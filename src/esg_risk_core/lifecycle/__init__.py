from esg_risk_core.lifecycle.admission import Admission, AlertAdmission
from esg_risk_core.lifecycle.locks import KeyedLocks
from esg_risk_core.lifecycle.metrics import (
    average_resolution_hours,
    critical_alerts,
    dashboard_metrics,
    days_overdue,
    is_overdue,
    overdue_alerts,
    resolution_rate,
)
from esg_risk_core.lifecycle.query import SORT_KEYS, AlertFilter, AlertSortKey, query_alerts
from esg_risk_core.lifecycle.service import AlertLifecycle
from esg_risk_core.lifecycle.store import AlertStore, InMemoryAlertStore
from esg_risk_core.lifecycle.transitions import TRANSITIONS, can_transition, new_alert

__all__ = [
    "Admission",
    "AlertAdmission",
    "AlertLifecycle",
    "AlertStore",
    "InMemoryAlertStore",
    "KeyedLocks",
    "AlertFilter",
    "AlertSortKey",
    "SORT_KEYS",
    "query_alerts",
    "TRANSITIONS",
    "can_transition",
    "new_alert",
    "is_overdue",
    "days_overdue",
    "resolution_rate",
    "average_resolution_hours",
    "dashboard_metrics",
    "overdue_alerts",
    "critical_alerts",
]
