from datetime import UTC, datetime, timedelta

import pytest

from esg_risk_core.domain import (
    AlertCategory,
    AlertStatus,
    ComplianceAlert,
    RecordMeta,
    Severity,
    SupplierSnapshot,
)

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_snapshot():
    """Factory for a healthy supplier; override fields to degrade it."""

    def factory(**overrides) -> SupplierSnapshot:
        values = {
            "supplier_id": "sup-1",
            "name": "Acme Textiles",
            "environmental": 85.0,
            "social": 85.0,
            "governance": 85.0,
            "last_audit_date": NOW - timedelta(days=200),
            "next_audit_date": NOW + timedelta(days=120),
            "has_renewable_energy_program": True,
            "has_carbon_neutrality_plan": True,
            "has_fair_labor_certification": True,
            "has_child_labor_policy": True,
            "has_safe_working_conditions": True,
            "certifications": frozenset({"ISO 14001"}),
        }
        values.update(overrides)
        return SupplierSnapshot(**values)

    return factory


@pytest.fixture
def weak_snapshot(make_snapshot) -> SupplierSnapshot:
    return make_snapshot(
        supplier_id="sup-weak",
        name="Weak Supplier",
        environmental=30.0,
        social=30.0,
        governance=30.0,
        next_audit_date=NOW - timedelta(days=10),
        has_renewable_energy_program=False,
        has_carbon_neutrality_plan=False,
        has_fair_labor_certification=False,
        has_child_labor_policy=False,
        has_safe_working_conditions=False,
        certifications=frozenset(),
    )


@pytest.fixture
def make_alert():
    def factory(**overrides) -> ComplianceAlert:
        values = {
            "supplier_id": "sup-1",
            "title": "Low Environmental Score Alert",
            "description": "Environmental score below threshold",
            "severity": Severity.HIGH,
            "category": AlertCategory.ENVIRONMENTAL,
            "detected_at": NOW - timedelta(days=2),
            "due_date": NOW + timedelta(days=5),
            "status": AlertStatus.OPEN,
        }
        if "alert_id" in overrides:
            values["record"] = RecordMeta(id=overrides.pop("alert_id"))
        values.update(overrides)
        return ComplianceAlert(**values)

    return factory
