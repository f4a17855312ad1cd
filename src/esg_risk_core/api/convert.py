"""Conversions between ESG Monitoring API payloads and domain objects.

One function per direction; fields the API sends but the core does not use
are dropped here, and derived fields are never sent back.
"""

from datetime import UTC, datetime
from typing import Any

from esg_risk_core.domain import (
    AlertCategory,
    AlertStatus,
    ComplianceAlert,
    EmissionSample,
    RecordMeta,
    Severity,
    SupplierSnapshot,
)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _optional_float(value: Any) -> float | None:
    return float(value) if value is not None else None


def parse_certifications(value: str | list[str] | None) -> frozenset[str]:
    if not value:
        return frozenset()
    items = value.split(",") if isinstance(value, str) else value
    return frozenset(item.strip() for item in items if item and item.strip())


def supplier_from_payload(data: dict[str, Any]) -> SupplierSnapshot:
    last_audit = parse_datetime(data.get("lastAuditDate"))
    next_audit = parse_datetime(data.get("nextAuditDate"))
    if last_audit is None or next_audit is None:
        raise ValueError(f"Supplier {data.get('id')} is missing audit dates")

    return SupplierSnapshot(
        supplier_id=str(data["id"]),
        name=data.get("name") or "",
        environmental=float(data.get("environmentalScore") or 0),
        social=float(data.get("socialScore") or 0),
        governance=float(data.get("governanceScore") or 0),
        has_renewable_energy_program=bool(data.get("hasRenewableEnergyProgram")),
        has_carbon_neutrality_plan=bool(data.get("hasCarbonNeutralityPlan")),
        has_fair_labor_certification=bool(data.get("hasFairLaborCertification")),
        has_child_labor_policy=bool(data.get("hasChildLaborPolicy")),
        has_safe_working_conditions=bool(data.get("hasSafeWorkingConditions")),
        certifications=parse_certifications(data.get("certifications")),
        last_audit_date=last_audit,
        next_audit_date=next_audit,
    )


def supplier_risk_payload(supplier_id: str, risk_level: str, rating: str) -> dict[str, Any]:
    return {"id": supplier_id, "riskLevel": risk_level, "esgRating": rating}


def alert_from_payload(data: dict[str, Any]) -> ComplianceAlert:
    detected_at = parse_datetime(data.get("detectedAt") or data.get("createdAt"))
    due_date = parse_datetime(data.get("dueDate"))
    if detected_at is None or due_date is None:
        raise ValueError(f"Alert {data.get('id')} is missing detectedAt or dueDate")

    return ComplianceAlert(
        supplier_id=str(data["supplierId"]),
        title=data.get("title") or "",
        description=data.get("description") or "",
        severity=Severity.parse(data["severity"]),
        category=AlertCategory.parse(data["category"]),
        detected_at=detected_at,
        due_date=due_date,
        status=AlertStatus.parse(data.get("status") or AlertStatus.OPEN.value),
        record=RecordMeta(
            id=str(data["id"]),
            created_at=parse_datetime(data.get("createdAt")),
            updated_at=parse_datetime(data.get("updatedAt")),
            is_active=data.get("isActive", True),
        ),
        version=int(data.get("version") or 0),
        threshold_value=_optional_float(data.get("thresholdValue")),
        actual_value=_optional_float(data.get("actualValue")),
        resolved_at=parse_datetime(data.get("resolvedAt")),
        resolved_by=data.get("resolvedBy") or None,
        resolution_notes=data.get("resolutionNotes") or None,
        escalated_at=parse_datetime(data.get("escalatedAt")),
        escalated_to=data.get("escalatedTo") or None,
        escalation_reason=data.get("escalationReason") or None,
        requires_follow_up=bool(data.get("requiresFollowUp")),
        follow_up_date=parse_datetime(data.get("followUpDate")),
    )


def alert_to_payload(alert: ComplianceAlert) -> dict[str, Any]:
    return {
        "id": alert.id,
        "supplierId": alert.supplier_id,
        "title": alert.title,
        "description": alert.description,
        "severity": alert.severity.name.title(),
        "category": alert.category.value,
        "status": alert.status.value,
        "detectedAt": format_datetime(alert.detected_at),
        "dueDate": format_datetime(alert.due_date),
        "thresholdValue": alert.threshold_value,
        "actualValue": alert.actual_value,
        "resolvedAt": format_datetime(alert.resolved_at),
        "resolvedBy": alert.resolved_by,
        "resolutionNotes": alert.resolution_notes,
        "escalatedAt": format_datetime(alert.escalated_at),
        "escalatedTo": alert.escalated_to,
        "escalationReason": alert.escalation_reason,
        "requiresFollowUp": alert.requires_follow_up,
        "followUpDate": format_datetime(alert.follow_up_date),
        "createdAt": format_datetime(alert.record.created_at),
        "updatedAt": format_datetime(alert.record.updated_at),
        "isActive": alert.record.is_active,
        "version": alert.version,
    }


def emission_sample_from_payload(data: dict[str, Any]) -> EmissionSample:
    return EmissionSample(
        period_key=f"{int(data['year']):04d}-{int(data['month']):02d}",
        total_emissions=float(data.get("totalEmissions") or 0),
        record_count=int(data.get("recordCount") or 0),
    )
