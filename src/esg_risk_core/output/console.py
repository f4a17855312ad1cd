from esg_risk_core.domain import ComplianceAlert


class ConsoleAlertOutput:
    """Console output adapter for alerts."""

    def __init__(self, prefix: str = "[ALERT]") -> None:
        self._prefix = prefix

    @property
    def name(self) -> str:
        return "console"

    async def send(self, alert: ComplianceAlert) -> None:
        title = alert.title[:50]
        if len(alert.title) > 50:
            title += "..."

        print(
            f"{self._prefix} [{alert.severity.name}] {title} - supplier {alert.supplier_id} "
            f"({alert.category.value}, {alert.status.value})"
        )
        print(f"  due {alert.due_date:%Y-%m-%d}: {alert.description}")
