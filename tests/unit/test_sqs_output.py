import json
from datetime import UTC, datetime, timedelta

from aiobotocore.session import get_session
from aiomoto import mock_aws

from esg_risk_core.domain import (
    AlertCategory,
    AlertStatus,
    ComplianceAlert,
    RecordMeta,
    Severity,
)
from esg_risk_core.output import AlertOutput
from esg_risk_core.output.sqs import SqsAlertOutput

DETECTED_AT = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


def _alert(**overrides) -> ComplianceAlert:
    values = {
        "supplier_id": "sup-1",
        "title": "Low Social Score Alert",
        "description": "Social score below threshold",
        "severity": Severity.HIGH,
        "category": AlertCategory.SOCIAL,
        "detected_at": DETECTED_AT,
        "due_date": DETECTED_AT + timedelta(days=7),
    }
    values.update(overrides)
    return ComplianceAlert(**values)


def test_sqs_output_implements_protocol():
    output = SqsAlertOutput(queue_url="https://sqs.us-east-1.amazonaws.com/123456789/test")
    assert isinstance(output, AlertOutput)


def test_sqs_output_name_property():
    output = SqsAlertOutput(queue_url="https://sqs.us-east-1.amazonaws.com/123456789/test")
    assert output.name == "sqs"


@mock_aws
async def test_sqs_output_send_to_queue():
    session = get_session()
    async with session.create_client("sqs", region_name="us-east-1") as client:
        response = await client.create_queue(QueueName="esg-alerts")
        queue_url = response["QueueUrl"]

        output = SqsAlertOutput(queue_url=queue_url, region="us-east-1")
        await output.send(_alert(record=RecordMeta(id="alert-1"), supplier_id="sup-3"))

        messages = await client.receive_message(QueueUrl=queue_url)
        assert "Messages" in messages
        assert len(messages["Messages"]) == 1

        body = json.loads(messages["Messages"][0]["Body"])
        assert body["id"] == "alert-1"
        assert body["supplierId"] == "sup-3"
        assert body["status"] == "Open"


@mock_aws
async def test_sqs_output_json_uses_api_field_names():
    session = get_session()
    async with session.create_client("sqs", region_name="us-east-1") as client:
        response = await client.create_queue(QueueName="esg-alerts")
        queue_url = response["QueueUrl"]

        output = SqsAlertOutput(queue_url=queue_url, region="us-east-1")
        alert = _alert(
            severity=Severity.CRITICAL,
            category=AlertCategory.LABOR_PRACTICES,
            status=AlertStatus.ESCALATED,
            escalated_at=DETECTED_AT,
            escalated_to="cso",
            threshold_value=50.0,
            actual_value=12.0,
        )

        await output.send(alert)

        messages = await client.receive_message(QueueUrl=queue_url)
        body = json.loads(messages["Messages"][0]["Body"])

        assert body["severity"] == "Critical"
        assert body["category"] == "LaborPractices"
        assert body["status"] == "Escalated"
        assert body["escalatedAt"] == "2024-06-01T12:00:00+00:00"
        assert body["escalatedTo"] == "cso"
        assert body["thresholdValue"] == 50.0
        assert body["actualValue"] == 12.0


@mock_aws
async def test_sqs_output_sets_message_attributes():
    session = get_session()
    async with session.create_client("sqs", region_name="us-east-1") as client:
        response = await client.create_queue(QueueName="esg-alerts")
        queue_url = response["QueueUrl"]

        output = SqsAlertOutput(queue_url=queue_url, region="us-east-1")
        await output.send(_alert(severity=Severity.MEDIUM, category=AlertCategory.AUDIT))

        messages = await client.receive_message(
            QueueUrl=queue_url, MessageAttributeNames=["All"]
        )
        attributes = messages["Messages"][0]["MessageAttributes"]

        assert attributes["severity"]["StringValue"] == "MEDIUM"
        assert attributes["category"]["StringValue"] == "Audit"
