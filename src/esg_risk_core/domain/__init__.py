"""Domain models for supplier risk classification and compliance alerting."""

from esg_risk_core.domain.errors import (
    ConflictError,
    CoreError,
    ErrorKind,
    NotFoundError,
    ValidationError,
)
from esg_risk_core.domain.models import (
    DEFAULT_DUE_DAYS,
    RESOLVED_STATUSES,
    AlertCategory,
    AlertDraft,
    AlertPatch,
    AlertStatus,
    Classification,
    ComplianceAlert,
    DashboardMetrics,
    EmissionSample,
    MonitoringRule,
    RecordMeta,
    RiskTier,
    RuleError,
    Severity,
    SupplierSnapshot,
    TrendDirection,
    TrendResult,
    default_due_date,
    stamp_created,
    stamp_updated,
    utcnow,
)
from esg_risk_core.domain.result import Err, Ok, Result

__all__ = [
    "AlertCategory",
    "AlertDraft",
    "AlertPatch",
    "AlertStatus",
    "Classification",
    "ComplianceAlert",
    "ConflictError",
    "CoreError",
    "DEFAULT_DUE_DAYS",
    "DashboardMetrics",
    "EmissionSample",
    "Err",
    "ErrorKind",
    "MonitoringRule",
    "NotFoundError",
    "Ok",
    "RESOLVED_STATUSES",
    "RecordMeta",
    "Result",
    "RiskTier",
    "RuleError",
    "Severity",
    "SupplierSnapshot",
    "TrendDirection",
    "TrendResult",
    "ValidationError",
    "default_due_date",
    "stamp_created",
    "stamp_updated",
    "utcnow",
]
