import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from esg_risk_core.domain import ComplianceAlert, CoreError, Err, MonitoringRule
from esg_risk_core.input import SupplierInput
from esg_risk_core.lifecycle import AlertAdmission
from esg_risk_core.monitoring import ComplianceMonitor, ScanResult
from esg_risk_core.output import AlertOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeliveryFailure:
    """An admitted alert that one output could not deliver."""

    alert: ComplianceAlert
    output: str
    reason: str


@dataclass(slots=True)
class PipelineReport:
    scan: ScanResult
    admitted: list[ComplianceAlert] = field(default_factory=list)
    duplicates: int = 0
    rejected: list[CoreError] = field(default_factory=list)
    failed_deliveries: list[DeliveryFailure] = field(default_factory=list)


class CompliancePipeline:
    def __init__(
        self,
        input_source: SupplierInput,
        monitor: ComplianceMonitor,
        rules: Sequence[MonitoringRule],
        admission: AlertAdmission,
        outputs: Sequence[AlertOutput],
    ) -> None:
        self._input = input_source
        self._monitor = monitor
        self._rules = tuple(rules)
        self._admission = admission
        self._outputs = tuple(outputs)

    async def _deliver(self, alert: ComplianceAlert, report: PipelineReport) -> None:
        for output in self._outputs:
            try:
                await output.send(alert)
            except Exception as exc:
                # the alert is already stored; a failed output must not stop the batch
                logger.exception("Output %s failed to deliver alert %s", output.name, alert.id)
                reason = str(exc) or type(exc).__name__
                report.failed_deliveries.append(
                    DeliveryFailure(alert=alert, output=output.name, reason=reason)
                )

    async def run(
        self,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> PipelineReport:
        scan = await self._monitor.scan_async(
            self._input, self._rules, timeout=timeout, cancel_event=cancel_event
        )
        report = PipelineReport(scan=scan)

        for draft in scan.drafts:
            result = await self._admission.admit(draft)
            if isinstance(result, Err):
                report.rejected.append(result.error)
                continue

            admission = result.value
            if not admission.created:
                report.duplicates += 1
                continue

            report.admitted.append(admission.alert)
            await self._deliver(admission.alert, report)

        logger.info(
            "Compliance pipeline: %d admitted, %d duplicate(s), %d rejected, %d failed deliveries",
            len(report.admitted),
            report.duplicates,
            len(report.rejected),
            len(report.failed_deliveries),
        )
        return report
