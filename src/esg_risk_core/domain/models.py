"""Core domain models for supplier risk classification and compliance alerting."""

from dataclasses import dataclass, field, fields, replace
from datetime import UTC, datetime, timedelta
from enum import Enum, IntEnum
from typing import Any
from uuid import uuid4


def utcnow() -> datetime:
    return datetime.now(UTC)


class Severity(IntEnum):
    """Alert severity levels, ordered for comparison (higher value = higher severity)."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def parse(cls, value: "str | int | Severity") -> "Severity":
        if isinstance(value, Severity):
            return value
        if isinstance(value, int):
            return cls(value)
        return cls[value.strip().upper()]


DEFAULT_DUE_DAYS: dict[Severity, int] = {
    Severity.CRITICAL: 3,
    Severity.HIGH: 7,
    Severity.MEDIUM: 14,
    Severity.LOW: 30,
}


def default_due_date(
    severity: Severity, detected_at: datetime, due_in_days: int | None = None
) -> datetime:
    days = due_in_days if due_in_days is not None else DEFAULT_DUE_DAYS[severity]
    return detected_at + timedelta(days=days)


class RiskTier(IntEnum):
    """Supplier risk tiers, monotonic in the accumulated risk-factor score."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class AlertStatus(Enum):
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"
    ESCALATED = "Escalated"

    @classmethod
    def parse(cls, value: "str | AlertStatus") -> "AlertStatus":
        if isinstance(value, AlertStatus):
            return value
        normalized = value.replace(" ", "").replace("_", "").lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        raise ValueError(f"Unknown alert status: {value!r}")


RESOLVED_STATUSES = frozenset({AlertStatus.RESOLVED, AlertStatus.CLOSED})


class AlertCategory(Enum):
    ENVIRONMENTAL = "Environmental"
    SOCIAL = "Social"
    GOVERNANCE = "Governance"
    CARBON_EMISSIONS = "CarbonEmissions"
    LABOR_PRACTICES = "LaborPractices"
    SAFETY_VIOLATION = "SafetyViolation"
    ETHICS_VIOLATION = "EthicsViolation"
    REGULATORY_COMPLIANCE = "RegulatoryCompliance"
    AUDIT = "Audit"

    @classmethod
    def parse(cls, value: "str | AlertCategory") -> "AlertCategory":
        if isinstance(value, AlertCategory):
            return value
        normalized = value.replace(" ", "").replace("_", "").lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        raise ValueError(f"Unknown alert category: {value!r}")


class TrendDirection(Enum):
    INCREASING = "Increasing"
    DECREASING = "Decreasing"
    STABLE = "Stable"


@dataclass(frozen=True, slots=True)
class RecordMeta:
    """Identity and bookkeeping shared by persisted entities."""

    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_active: bool = True


def stamp_created(record: RecordMeta, now: datetime) -> RecordMeta:
    return replace(record, created_at=now, updated_at=None)


def stamp_updated(record: RecordMeta, now: datetime) -> RecordMeta:
    return replace(record, updated_at=now)


@dataclass(frozen=True, slots=True)
class SupplierSnapshot:
    """Read-only projection of a supplier's ESG attributes."""

    supplier_id: str
    environmental: float
    social: float
    governance: float
    last_audit_date: datetime
    next_audit_date: datetime
    name: str = ""
    has_renewable_energy_program: bool = False
    has_carbon_neutrality_plan: bool = False
    has_fair_labor_certification: bool = False
    has_child_labor_policy: bool = False
    has_safe_working_conditions: bool = False
    certifications: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # naive audit dates are taken as UTC so they compare with utcnow()
        for name in ("last_audit_date", "next_audit_date"):
            value = getattr(self, name)
            if value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=UTC))

    @property
    def overall_score(self) -> float:
        return (self.environmental + self.social + self.governance) / 3

    @property
    def display_name(self) -> str:
        return self.name or self.supplier_id


@dataclass(frozen=True, slots=True)
class Classification:
    tier: RiskTier
    rating: str
    risk_factor_score: int


@dataclass(frozen=True, slots=True)
class MonitoringRule:
    """A configured threshold check evaluated against supplier data.

    ``metric_selector`` and ``operator`` are kept as raw strings so that a
    malformed rule is rejected at scan time without failing the whole batch.
    """

    name: str
    category: AlertCategory
    metric_selector: str
    operator: str
    threshold_value: float
    severity: Severity
    due_in_days: int | None = None


@dataclass(frozen=True, slots=True)
class RuleError:
    rule_name: str
    reason: str
    rule: MonitoringRule | None = None


@dataclass(frozen=True, slots=True)
class AlertDraft:
    """A candidate violation produced by a scan, not yet admitted."""

    supplier_id: str
    title: str
    description: str
    severity: Severity
    category: AlertCategory
    detected_at: datetime
    threshold_value: float | None = None
    actual_value: float | None = None
    due_date: datetime | None = None
    rule_name: str | None = None

    @property
    def idempotency_key(self) -> tuple[str, AlertCategory]:
        return (self.supplier_id, self.category)


@dataclass(frozen=True, slots=True)
class ComplianceAlert:
    """A tracked compliance violation.

    Instances are values: lifecycle operations return a new alert with a
    bumped ``version`` instead of mutating in place.
    """

    supplier_id: str
    title: str
    description: str
    severity: Severity
    category: AlertCategory
    detected_at: datetime
    due_date: datetime
    status: AlertStatus = AlertStatus.OPEN
    record: RecordMeta = field(default_factory=RecordMeta)
    version: int = 0
    threshold_value: float | None = None
    actual_value: float | None = None
    resolved_at: datetime | None = None
    resolved_by: str | None = None
    resolution_notes: str | None = None
    escalated_at: datetime | None = None
    escalated_to: str | None = None
    escalation_reason: str | None = None
    requires_follow_up: bool = False
    follow_up_date: datetime | None = None

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def is_unresolved(self) -> bool:
        return self.status not in RESOLVED_STATUSES


@dataclass(frozen=True, slots=True)
class AlertPatch:
    """Field updates for an alert; ``None`` leaves a field unchanged."""

    title: str | None = None
    description: str | None = None
    severity: Severity | None = None
    category: AlertCategory | None = None
    due_date: datetime | None = None
    threshold_value: float | None = None
    actual_value: float | None = None
    requires_follow_up: bool | None = None
    follow_up_date: datetime | None = None

    def changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True, slots=True)
class EmissionSample:
    """Emission total for one calendar month, e.g. ``period_key="2024-03"``."""

    period_key: str
    total_emissions: float
    record_count: int = 0


@dataclass(frozen=True, slots=True)
class TrendResult:
    slope: float
    direction: TrendDirection
    magnitude_percent: float


@dataclass(frozen=True, slots=True)
class DashboardMetrics:
    total: int
    open: int
    resolved: int
    critical: int
    resolution_rate: float
    average_resolution_hours: float
    in_progress: int = 0
    escalated: int = 0
    overdue: int = 0
