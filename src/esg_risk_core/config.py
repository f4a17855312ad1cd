import json
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from esg_risk_core.domain import MonitoringRule, RuleError, ValidationError
from esg_risk_core.monitoring.rules import DEFAULT_UPCOMING_AUDIT_DAYS, rule_from_mapping

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:5000"
DEFAULT_AWS_REGION = "us-east-1"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float | None) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_key: str | None = None
    rules_path: str | None = None
    scan_timeout_seconds: float | None = None
    alert_queue_url: str | None = None
    aws_region: str = DEFAULT_AWS_REGION
    upcoming_audit_days: int = DEFAULT_UPCOMING_AUDIT_DAYS

    @classmethod
    def from_env(cls, dotenv: bool = True, env_file: str | Path | None = None) -> "Settings":
        if dotenv:
            load_dotenv(env_file or find_dotenv(usecwd=True))
        return cls(
            api_base_url=os.getenv("ESG_API_BASE_URL", DEFAULT_API_BASE_URL),
            api_key=os.getenv("ESG_API_KEY") or None,
            rules_path=os.getenv("ESG_RULES_PATH") or None,
            scan_timeout_seconds=_env_float("ESG_SCAN_TIMEOUT_SECONDS", None),
            alert_queue_url=os.getenv("ESG_ALERT_QUEUE_URL") or None,
            aws_region=os.getenv("ESG_AWS_REGION", DEFAULT_AWS_REGION),
            upcoming_audit_days=_env_int("ESG_UPCOMING_AUDIT_DAYS", DEFAULT_UPCOMING_AUDIT_DAYS),
        )


def parse_rules(records: Sequence[Mapping[str, Any]]) -> tuple[list[MonitoringRule], list[RuleError]]:
    """Parse rule records one by one; a bad record is reported, not fatal."""
    rules: list[MonitoringRule] = []
    errors: list[RuleError] = []

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            errors.append(RuleError(f"#{index}", "rule record is not an object"))
            continue
        try:
            rules.append(rule_from_mapping(record))
        except ValidationError as exc:
            name = str(record.get("name") or f"#{index}")
            logger.warning("Rejected rule record %s: %s", name, exc.message)
            errors.append(RuleError(name, exc.message))

    return rules, errors


def load_rules(path: str | Path) -> tuple[list[MonitoringRule], list[RuleError]]:
    """Load a rule set from a JSON file holding an array (or ``{"rules": [...]}``)."""
    with Path(path).open(encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, Mapping):
        data = data.get("rules") or []
    return parse_rules(data)
