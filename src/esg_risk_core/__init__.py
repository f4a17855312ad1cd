__version__ = "0.1.0"

from esg_risk_core.analytics import compute_trend, emission_trend_report
from esg_risk_core.core import CompliancePipeline, PipelineReport
from esg_risk_core.domain import (
    AlertCategory,
    AlertDraft,
    AlertStatus,
    ComplianceAlert,
    MonitoringRule,
    RiskTier,
    Severity,
    SupplierSnapshot,
)
from esg_risk_core.input import ManualSupplierInput, SupplierInput
from esg_risk_core.lifecycle import AlertAdmission, AlertLifecycle, InMemoryAlertStore
from esg_risk_core.monitoring import ComplianceMonitor, default_rules
from esg_risk_core.output import AlertOutput, ConsoleAlertOutput
from esg_risk_core.risk import RiskClassifier, classify

__all__ = [
    "__version__",
    "CompliancePipeline",
    "PipelineReport",
    "SupplierSnapshot",
    "MonitoringRule",
    "AlertDraft",
    "ComplianceAlert",
    "AlertCategory",
    "AlertStatus",
    "RiskTier",
    "Severity",
    "RiskClassifier",
    "classify",
    "ComplianceMonitor",
    "default_rules",
    "AlertLifecycle",
    "AlertAdmission",
    "InMemoryAlertStore",
    "compute_trend",
    "emission_trend_report",
    "SupplierInput",
    "ManualSupplierInput",
    "AlertOutput",
    "ConsoleAlertOutput",
]
