from esg_risk_core.monitoring.base import MetricSelector
from esg_risk_core.monitoring.metrics import FieldMetric, MetricRegistry, normalize_selector
from esg_risk_core.monitoring.monitor import ComplianceMonitor, ScanResult
from esg_risk_core.monitoring.rules import (
    DEFAULT_SCORE_THRESHOLD,
    DEFAULT_UPCOMING_AUDIT_DAYS,
    OPERATORS,
    default_rules,
    parse_operator,
    rule_from_mapping,
)

__all__ = [
    "MetricSelector",
    "FieldMetric",
    "MetricRegistry",
    "normalize_selector",
    "ComplianceMonitor",
    "ScanResult",
    "OPERATORS",
    "DEFAULT_SCORE_THRESHOLD",
    "DEFAULT_UPCOMING_AUDIT_DAYS",
    "default_rules",
    "parse_operator",
    "rule_from_mapping",
]
