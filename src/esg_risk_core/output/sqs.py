import json

from aiobotocore.session import get_session

from esg_risk_core.api.convert import alert_to_payload
from esg_risk_core.domain import ComplianceAlert


class SqsAlertOutput:
    def __init__(self, queue_url: str, region: str = "us-east-1") -> None:
        self._queue_url = queue_url
        self._region = region
        self._session = get_session()

    @property
    def name(self) -> str:
        return "sqs"

    async def send(self, alert: ComplianceAlert) -> None:
        async with self._session.create_client("sqs", region_name=self._region) as client:
            await client.send_message(
                QueueUrl=self._queue_url,
                MessageBody=self._serialize_alert(alert),
                MessageAttributes={
                    "severity": {"DataType": "String", "StringValue": alert.severity.name},
                    "category": {"DataType": "String", "StringValue": alert.category.value},
                },
            )

    def _serialize_alert(self, alert: ComplianceAlert) -> str:
        return json.dumps(alert_to_payload(alert))
