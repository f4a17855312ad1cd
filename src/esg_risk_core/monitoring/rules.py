import operator
from collections.abc import Callable, Mapping
from typing import Any

from esg_risk_core.domain import AlertCategory, MonitoringRule, Severity, ValidationError

Comparison = Callable[[float, float], bool]

OPERATORS: dict[str, Comparison] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
}

# Authored against a 0-5 score scale while sub-scores are 0-100. Kept as the
# configurable default; override via the rule set rather than rescaling here.
DEFAULT_SCORE_THRESHOLD = 3.0
DEFAULT_UPCOMING_AUDIT_DAYS = 30


def parse_operator(symbol: str) -> Comparison | None:
    return OPERATORS.get(symbol.strip())


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def rule_from_mapping(record: Mapping[str, Any]) -> MonitoringRule:
    """Build a rule from a configuration record (snake_case or camelCase keys).

    Raises ValidationError when a required field is missing or cannot be
    parsed. Selector and operator are validated later, at scan time.
    """
    name = _pick(record, "name")
    if not name:
        raise ValidationError("rule is missing a name")

    missing = [
        label
        for label, value in (
            ("category", _pick(record, "category")),
            ("metric_selector", _pick(record, "metric_selector", "metricSelector")),
            ("operator", _pick(record, "operator")),
            ("threshold_value", _pick(record, "threshold_value", "thresholdValue")),
            ("severity", _pick(record, "severity")),
        )
        if value is None
    ]
    if missing:
        raise ValidationError(f"rule {name!r} is missing {', '.join(missing)}")

    try:
        category = AlertCategory.parse(record["category"])
        severity = Severity.parse(record["severity"])
        threshold = float(_pick(record, "threshold_value", "thresholdValue"))
        due_in_days = _pick(record, "due_in_days", "dueInDays")
        due_in_days = int(due_in_days) if due_in_days is not None else None
    except (KeyError, ValueError, TypeError) as exc:
        raise ValidationError(f"rule {name!r} is malformed: {exc}") from exc

    return MonitoringRule(
        name=str(name),
        category=category,
        metric_selector=str(_pick(record, "metric_selector", "metricSelector")),
        operator=str(record["operator"]),
        threshold_value=threshold,
        severity=severity,
        due_in_days=due_in_days,
    )


def default_rules(
    score_threshold: float = DEFAULT_SCORE_THRESHOLD,
    upcoming_audit_days: int = DEFAULT_UPCOMING_AUDIT_DAYS,
) -> list[MonitoringRule]:
    """Conventional rule set: low sub-scores and an audit due soon."""
    return [
        MonitoringRule(
            name="Low Environmental Score Alert",
            category=AlertCategory.ENVIRONMENTAL,
            metric_selector="environmental",
            operator="<",
            threshold_value=score_threshold,
            severity=Severity.HIGH,
        ),
        MonitoringRule(
            name="Low Social Score Alert",
            category=AlertCategory.SOCIAL,
            metric_selector="social",
            operator="<",
            threshold_value=score_threshold,
            severity=Severity.HIGH,
        ),
        MonitoringRule(
            name="Low Governance Score Alert",
            category=AlertCategory.GOVERNANCE,
            metric_selector="governance",
            operator="<",
            threshold_value=score_threshold,
            severity=Severity.HIGH,
        ),
        MonitoringRule(
            name="Upcoming Audit Alert",
            category=AlertCategory.AUDIT,
            metric_selector="days_until_next_audit",
            operator="<=",
            threshold_value=float(upcoming_audit_days),
            severity=Severity.MEDIUM,
        ),
    ]
