"""Alert state machine.

Every function here is pure: it returns a new alert value (or an ``Err``)
and never touches the alert it was given.

    Open -> InProgress -> Resolved -> Closed
      |         |            ^
      +---------+--> Escalated
"""

from dataclasses import replace
from datetime import datetime

from esg_risk_core.domain import (
    AlertDraft,
    AlertPatch,
    AlertStatus,
    ComplianceAlert,
    ConflictError,
    Err,
    Ok,
    RecordMeta,
    Result,
    default_due_date,
)

TRANSITIONS: dict[AlertStatus, frozenset[AlertStatus]] = {
    AlertStatus.OPEN: frozenset(
        {AlertStatus.IN_PROGRESS, AlertStatus.RESOLVED, AlertStatus.ESCALATED}
    ),
    AlertStatus.IN_PROGRESS: frozenset({AlertStatus.RESOLVED, AlertStatus.ESCALATED}),
    AlertStatus.ESCALATED: frozenset({AlertStatus.RESOLVED, AlertStatus.ESCALATED}),
    AlertStatus.RESOLVED: frozenset({AlertStatus.CLOSED}),
    AlertStatus.CLOSED: frozenset(),
}


def can_transition(source: AlertStatus, target: AlertStatus) -> bool:
    return target in TRANSITIONS[source]


def _reject(alert: ComplianceAlert, target: AlertStatus) -> Err:
    return Err(
        ConflictError(
            f"Alert {alert.id} cannot move from {alert.status.value} to {target.value}"
        )
    )


def new_alert(
    draft: AlertDraft,
    due_date: datetime | None = None,
    record: RecordMeta | None = None,
) -> ComplianceAlert:
    """Build an Open alert from a draft; due date falls back to draft, then severity default."""
    due = due_date or draft.due_date or default_due_date(draft.severity, draft.detected_at)
    return ComplianceAlert(
        supplier_id=draft.supplier_id,
        title=draft.title,
        description=draft.description,
        severity=draft.severity,
        category=draft.category,
        detected_at=draft.detected_at,
        due_date=due,
        status=AlertStatus.OPEN,
        record=record or RecordMeta(),
        threshold_value=draft.threshold_value,
        actual_value=draft.actual_value,
    )


def start_progress(alert: ComplianceAlert) -> Result[ComplianceAlert]:
    if not can_transition(alert.status, AlertStatus.IN_PROGRESS):
        return _reject(alert, AlertStatus.IN_PROGRESS)
    return Ok(replace(alert, status=AlertStatus.IN_PROGRESS))


def resolve(
    alert: ComplianceAlert,
    resolved_by: str,
    notes: str | None,
    now: datetime,
) -> Result[ComplianceAlert]:
    if not can_transition(alert.status, AlertStatus.RESOLVED):
        return _reject(alert, AlertStatus.RESOLVED)
    return Ok(
        replace(
            alert,
            status=AlertStatus.RESOLVED,
            resolved_at=now,
            resolved_by=resolved_by,
            resolution_notes=notes,
            escalated_at=None,
        )
    )


def escalate(
    alert: ComplianceAlert,
    escalated_to: str,
    reason: str | None,
    now: datetime,
) -> Result[ComplianceAlert]:
    if not can_transition(alert.status, AlertStatus.ESCALATED):
        return _reject(alert, AlertStatus.ESCALATED)
    return Ok(
        replace(
            alert,
            status=AlertStatus.ESCALATED,
            escalated_at=now,
            escalated_to=escalated_to,
            escalation_reason=reason,
        )
    )


def close(alert: ComplianceAlert) -> Result[ComplianceAlert]:
    if not can_transition(alert.status, AlertStatus.CLOSED):
        return _reject(alert, AlertStatus.CLOSED)
    return Ok(replace(alert, status=AlertStatus.CLOSED))


def apply_patch(alert: ComplianceAlert, patch: AlertPatch) -> Result[ComplianceAlert]:
    if alert.status is AlertStatus.CLOSED:
        return Err(ConflictError(f"Alert {alert.id} is closed and can no longer be updated"))
    return Ok(replace(alert, **patch.changes()))
