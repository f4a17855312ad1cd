from esg_risk_core.api.client import ESGMonitoringClient
from esg_risk_core.domain import ComplianceAlert


class ApiAlertOutput:
    """Persists admitted alerts through the ESG Monitoring API."""

    def __init__(self, client: ESGMonitoringClient) -> None:
        self._client = client

    @property
    def name(self) -> str:
        return "api"

    async def send(self, alert: ComplianceAlert) -> None:
        await self._client.persist_alert(alert)
