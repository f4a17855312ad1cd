"""Derived alert metrics.

Overdue state is always computed from ``now``; nothing here is persisted.
Empty collections yield 0 so dashboards always render.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from esg_risk_core.domain import (
    RESOLVED_STATUSES,
    AlertStatus,
    ComplianceAlert,
    DashboardMetrics,
    Severity,
    utcnow,
)


def is_overdue(alert: ComplianceAlert, now: datetime | None = None) -> bool:
    now = now or utcnow()
    return now > alert.due_date and alert.status not in RESOLVED_STATUSES


def days_overdue(alert: ComplianceAlert, now: datetime | None = None) -> int:
    now = now or utcnow()
    if not is_overdue(alert, now):
        return 0
    return (now - alert.due_date).days


def _in_range(
    alerts: Iterable[ComplianceAlert],
    start: datetime | None,
    end: datetime | None,
) -> list[ComplianceAlert]:
    return [
        a
        for a in alerts
        if (start is None or a.detected_at >= start) and (end is None or a.detected_at <= end)
    ]


def resolution_rate(
    alerts: Iterable[ComplianceAlert],
    start: datetime | None = None,
    end: datetime | None = None,
) -> float:
    selected = _in_range(alerts, start, end)
    if not selected:
        return 0.0
    resolved = sum(1 for a in selected if a.status in RESOLVED_STATUSES)
    return round(100 * resolved / len(selected), 2)


def average_resolution_hours(
    alerts: Iterable[ComplianceAlert],
    start: datetime | None = None,
    end: datetime | None = None,
) -> float:
    durations = [
        (a.resolved_at - a.detected_at).total_seconds() / 3600
        for a in _in_range(alerts, start, end)
        if a.resolved_at is not None
    ]
    if not durations:
        return 0.0
    return round(sum(durations) / len(durations), 2)


def dashboard_metrics(
    alerts: Sequence[ComplianceAlert],
    now: datetime | None = None,
) -> DashboardMetrics:
    now = now or utcnow()
    return DashboardMetrics(
        total=len(alerts),
        open=sum(1 for a in alerts if a.status is AlertStatus.OPEN),
        resolved=sum(1 for a in alerts if a.status in RESOLVED_STATUSES),
        critical=sum(1 for a in alerts if a.severity is Severity.CRITICAL and a.is_unresolved),
        resolution_rate=resolution_rate(alerts),
        average_resolution_hours=average_resolution_hours(alerts),
        in_progress=sum(1 for a in alerts if a.status is AlertStatus.IN_PROGRESS),
        escalated=sum(1 for a in alerts if a.status is AlertStatus.ESCALATED),
        overdue=sum(1 for a in alerts if is_overdue(a, now)),
    )


def overdue_alerts(
    alerts: Iterable[ComplianceAlert],
    now: datetime | None = None,
) -> list[ComplianceAlert]:
    """Overdue alerts, most overdue first."""
    now = now or utcnow()
    return sorted((a for a in alerts if is_overdue(a, now)), key=lambda a: a.due_date)


_ACTIONABLE_STATUSES = frozenset({AlertStatus.OPEN, AlertStatus.IN_PROGRESS})


def critical_alerts(
    alerts: Iterable[ComplianceAlert],
    now: datetime | None = None,
    min_days_overdue: int = 0,
    limit: int | None = None,
) -> list[ComplianceAlert]:
    """Open or in-progress High/Critical alerts, newest first.

    Escalated alerts are not listed. With ``min_days_overdue`` > 0 only
    alerts whose due date lies at least that many days in the past are
    returned.
    """
    now = now or utcnow()
    threshold = now - timedelta(days=min_days_overdue)
    selected = [
        a
        for a in alerts
        if a.severity >= Severity.HIGH
        and a.status in _ACTIONABLE_STATUSES
        and (min_days_overdue == 0 or a.due_date < threshold)
    ]
    selected.sort(key=lambda a: a.detected_at, reverse=True)
    return selected[:limit] if limit is not None else selected
