from esg_risk_core.output.api import ApiAlertOutput
from esg_risk_core.output.base import AlertOutput
from esg_risk_core.output.console import ConsoleAlertOutput
from esg_risk_core.output.sqs import SqsAlertOutput

__all__ = ["AlertOutput", "ApiAlertOutput", "ConsoleAlertOutput", "SqsAlertOutput"]
