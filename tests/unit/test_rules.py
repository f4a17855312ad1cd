import pytest

from esg_risk_core.domain import AlertCategory, Severity, ValidationError
from esg_risk_core.monitoring import (
    DEFAULT_SCORE_THRESHOLD,
    default_rules,
    parse_operator,
    rule_from_mapping,
)


class TestParseOperator:
    @pytest.mark.parametrize(
        ("symbol", "left", "right", "expected"),
        [
            ("<", 1, 2, True),
            ("<=", 2, 2, True),
            (">", 2, 2, False),
            (">=", 3, 2, True),
            ("==", 2, 2, True),
        ],
    )
    def test_known_operators(self, symbol, left, right, expected) -> None:
        assert parse_operator(symbol)(left, right) is expected

    def test_unknown_operator(self) -> None:
        assert parse_operator("!=") is None


class TestRuleFromMapping:
    def test_camel_case_record(self) -> None:
        rule = rule_from_mapping(
            {
                "name": "Carbon plan missing",
                "category": "CarbonEmissions",
                "metricSelector": "hasCarbonNeutralityPlan",
                "operator": "<",
                "thresholdValue": "1",
                "severity": "high",
                "dueInDays": 5,
            }
        )

        assert rule.category is AlertCategory.CARBON_EMISSIONS
        assert rule.metric_selector == "hasCarbonNeutralityPlan"
        assert rule.threshold_value == 1.0
        assert rule.severity is Severity.HIGH
        assert rule.due_in_days == 5

    def test_snake_case_record(self) -> None:
        rule = rule_from_mapping(
            {
                "name": "Governance",
                "category": "Governance",
                "metric_selector": "governance",
                "operator": "<=",
                "threshold_value": 40,
                "severity": 4,
            }
        )

        assert rule.severity is Severity.CRITICAL
        assert rule.due_in_days is None

    def test_unknown_operator_is_kept_for_scan_time(self) -> None:
        rule = rule_from_mapping(
            {
                "name": "Odd",
                "category": "Social",
                "metric_selector": "social",
                "operator": "~",
                "threshold_value": 1,
                "severity": "Low",
            }
        )
        assert rule.operator == "~"

    def test_missing_fields(self) -> None:
        with pytest.raises(ValidationError, match="missing threshold_value, severity"):
            rule_from_mapping(
                {"name": "Partial", "category": "Social", "metric_selector": "social", "operator": "<"}
            )

    def test_missing_name(self) -> None:
        with pytest.raises(ValidationError, match="missing a name"):
            rule_from_mapping({"category": "Social"})

    @pytest.mark.parametrize(
        "overrides",
        [{"severity": "urgent"}, {"category": "Weather"}, {"threshold_value": "low"}],
    )
    def test_malformed_values(self, overrides) -> None:
        record = {
            "name": "Broken",
            "category": "Social",
            "metric_selector": "social",
            "operator": "<",
            "threshold_value": 10,
            "severity": "Low",
        }
        record.update(overrides)

        with pytest.raises(ValidationError, match="malformed"):
            rule_from_mapping(record)


class TestDefaultRules:
    def test_conventional_rule_set(self) -> None:
        rules = default_rules()

        assert [r.category for r in rules] == [
            AlertCategory.ENVIRONMENTAL,
            AlertCategory.SOCIAL,
            AlertCategory.GOVERNANCE,
            AlertCategory.AUDIT,
        ]
        assert all(r.threshold_value == DEFAULT_SCORE_THRESHOLD for r in rules[:3])
        assert all(r.severity is Severity.HIGH for r in rules[:3])
        assert rules[3].severity is Severity.MEDIUM
        assert rules[3].threshold_value == 30.0

    def test_thresholds_are_configurable(self) -> None:
        rules = default_rules(score_threshold=60.0, upcoming_audit_days=14)

        assert rules[0].threshold_value == 60.0
        assert rules[3].threshold_value == 14.0
