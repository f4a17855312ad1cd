import re
from collections.abc import Callable
from datetime import datetime

from esg_risk_core.domain import SupplierSnapshot
from esg_risk_core.monitoring.base import MetricSelector
from esg_risk_core.risk import RiskClassifier

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

SnapshotGetter = Callable[[SupplierSnapshot, datetime], float | None]


def normalize_selector(selector: str) -> str:
    """``nextAuditDate`` / ``next-audit-date`` / ``Next Audit Date`` -> ``next_audit_date``."""
    snake = _CAMEL_BOUNDARY.sub("_", selector.strip())
    return re.sub(r"[\s\-]+", "_", snake).lower()


class FieldMetric:
    def __init__(self, name: str, getter: SnapshotGetter) -> None:
        self._name = name
        self._getter = getter

    @property
    def name(self) -> str:
        return self._name

    def resolve(self, snapshot: SupplierSnapshot, now: datetime) -> float | None:
        return self._getter(snapshot, now)


def _days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 86400


def _flag(attribute: str) -> SnapshotGetter:
    return lambda snapshot, now: 1.0 if getattr(snapshot, attribute) else 0.0


class MetricRegistry:
    """Registry of metric selectors addressable by monitoring rules."""

    def __init__(self) -> None:
        self._metrics: dict[str, MetricSelector] = {}
        self._aliases: dict[str, str] = {}

    def register(self, metric: MetricSelector, aliases: tuple[str, ...] = ()) -> None:
        self._metrics[metric.name] = metric
        for alias in aliases:
            self._aliases[normalize_selector(alias)] = metric.name

    @property
    def metrics(self) -> tuple[MetricSelector, ...]:
        return tuple(self._metrics.values())

    def get(self, selector: str) -> MetricSelector | None:
        key = normalize_selector(selector)
        key = self._aliases.get(key, key)
        return self._metrics.get(key)

    @classmethod
    def default(cls, classifier: RiskClassifier | None = None) -> "MetricRegistry":
        classifier = classifier or RiskClassifier()
        registry = cls()

        registry.register(
            FieldMetric("environmental", lambda s, now: s.environmental),
            aliases=("environmental_score",),
        )
        registry.register(
            FieldMetric("social", lambda s, now: s.social),
            aliases=("social_score",),
        )
        registry.register(
            FieldMetric("governance", lambda s, now: s.governance),
            aliases=("governance_score",),
        )
        registry.register(
            FieldMetric("overall_score", lambda s, now: s.overall_score),
            aliases=("overall_esg_score", "esg_score"),
        )
        registry.register(
            FieldMetric("certification_count", lambda s, now: float(len(s.certifications))),
        )
        registry.register(
            FieldMetric(
                "days_until_next_audit",
                lambda s, now: _days_between(now, s.next_audit_date),
            ),
            aliases=("next_audit_date",),
        )
        registry.register(
            FieldMetric(
                "days_since_last_audit",
                lambda s, now: _days_between(s.last_audit_date, now),
            ),
            aliases=("last_audit_date",),
        )
        registry.register(
            FieldMetric(
                "risk_factor_score",
                lambda s, now: float(classifier.risk_factor_score(s, now)),
            ),
        )
        registry.register(
            FieldMetric("risk_tier", lambda s, now: float(classifier.classify(s, now).tier)),
        )

        for attribute in (
            "has_renewable_energy_program",
            "has_carbon_neutrality_plan",
            "has_fair_labor_certification",
            "has_child_labor_policy",
            "has_safe_working_conditions",
        ):
            registry.register(FieldMetric(attribute, _flag(attribute)))

        return registry
