import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from esg_risk_core.domain import (
    AlertDraft,
    MonitoringRule,
    RuleError,
    SupplierSnapshot,
    default_due_date,
    utcnow,
)
from esg_risk_core.monitoring.base import MetricSelector
from esg_risk_core.monitoring.metrics import MetricRegistry
from esg_risk_core.monitoring.rules import Comparison, parse_operator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _CompiledRule:
    rule: MonitoringRule
    metric: MetricSelector
    compare: Comparison


@dataclass(slots=True)
class ScanResult:
    drafts: list[AlertDraft] = field(default_factory=list)
    errors: list[RuleError] = field(default_factory=list)
    suppliers_scanned: int = 0
    completed: bool = True


async def _as_async(snapshots: Iterable[SupplierSnapshot]) -> AsyncIterator[SupplierSnapshot]:
    for snapshot in snapshots:
        yield snapshot


class ComplianceMonitor:
    """Evaluates monitoring rules against supplier snapshots.

    A malformed rule, or a metric that cannot be resolved for a supplier,
    is reported as a ``RuleError`` and skipped; it never aborts the scan.
    Drafts are not deduplicated here; see ``AlertAdmission``.
    """

    def __init__(self, registry: MetricRegistry | None = None) -> None:
        self._registry = registry or MetricRegistry.default()

    @property
    def registry(self) -> MetricRegistry:
        return self._registry

    def compile(self, rules: Sequence[MonitoringRule]) -> tuple[list[_CompiledRule], list[RuleError]]:
        compiled: list[_CompiledRule] = []
        errors: list[RuleError] = []

        for rule in rules:
            metric = self._registry.get(rule.metric_selector)
            if metric is None:
                errors.append(
                    RuleError(rule.name, f"unknown metric selector: {rule.metric_selector!r}", rule)
                )
                continue

            compare = parse_operator(rule.operator)
            if compare is None:
                errors.append(RuleError(rule.name, f"unknown operator: {rule.operator!r}", rule))
                continue

            compiled.append(_CompiledRule(rule=rule, metric=metric, compare=compare))

        for error in errors:
            logger.warning("Rejected monitoring rule %r: %s", error.rule_name, error.reason)

        return compiled, errors

    def _evaluate(
        self,
        snapshot: SupplierSnapshot,
        compiled: Sequence[_CompiledRule],
        now: datetime,
        result: ScanResult,
    ) -> None:
        for entry in compiled:
            rule = entry.rule
            try:
                value = entry.metric.resolve(snapshot, now)
            except (TypeError, ValueError, AttributeError) as exc:
                value = None
                reason = f"metric {entry.metric.name!r} failed for supplier {snapshot.supplier_id}: {exc}"
            else:
                reason = f"metric {entry.metric.name!r} unavailable for supplier {snapshot.supplier_id}"

            if value is None:
                logger.warning("Skipping rule %r: %s", rule.name, reason)
                result.errors.append(RuleError(rule.name, reason, rule))
                continue

            if not entry.compare(value, rule.threshold_value):
                continue

            result.drafts.append(
                AlertDraft(
                    supplier_id=snapshot.supplier_id,
                    title=rule.name,
                    description=(
                        f"Supplier {snapshot.display_name} has {entry.metric.name} of "
                        f"{value:g} ({rule.operator} threshold {rule.threshold_value:g})"
                    ),
                    severity=rule.severity,
                    category=rule.category,
                    detected_at=now,
                    threshold_value=rule.threshold_value,
                    actual_value=value,
                    due_date=default_due_date(rule.severity, now, rule.due_in_days),
                    rule_name=rule.name,
                )
            )

    def scan(
        self,
        snapshots: Iterable[SupplierSnapshot],
        rules: Sequence[MonitoringRule],
        now: datetime | None = None,
    ) -> ScanResult:
        now = now or utcnow()
        compiled, errors = self.compile(rules)
        result = ScanResult(errors=errors)

        for snapshot in snapshots:
            self._evaluate(snapshot, compiled, now, result)
            result.suppliers_scanned += 1

        logger.info(
            "Compliance scan finished: %d supplier(s), %d draft(s), %d rule error(s)",
            result.suppliers_scanned,
            len(result.drafts),
            len(result.errors),
        )
        return result

    async def scan_async(
        self,
        snapshots: Iterable[SupplierSnapshot] | AsyncIterable[SupplierSnapshot],
        rules: Sequence[MonitoringRule],
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
        now: datetime | None = None,
    ) -> ScanResult:
        """Time-bounded, cancellable scan returning partial results on early stop."""
        now = now or utcnow()
        compiled, errors = self.compile(rules)
        result = ScanResult(errors=errors)

        source: AsyncIterable[SupplierSnapshot]
        if isinstance(snapshots, AsyncIterable):
            source = snapshots
        else:
            source = _as_async(snapshots)

        try:
            async with asyncio.timeout(timeout):
                async for snapshot in source:
                    if cancel_event is not None and cancel_event.is_set():
                        result.completed = False
                        logger.warning(
                            "Compliance scan cancelled after %d supplier(s)",
                            result.suppliers_scanned,
                        )
                        break
                    self._evaluate(snapshot, compiled, now, result)
                    result.suppliers_scanned += 1
                    await asyncio.sleep(0)
        except TimeoutError:
            result.completed = False
            logger.warning(
                "Compliance scan timed out after %ss; %d supplier(s) scanned",
                timeout,
                result.suppliers_scanned,
            )

        logger.info(
            "Compliance scan finished: %d supplier(s), %d draft(s), %d rule error(s)",
            result.suppliers_scanned,
            len(result.drafts),
            len(result.errors),
        )
        return result
