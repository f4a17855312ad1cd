from datetime import timedelta

import pytest

from esg_risk_core.domain import AlertCategory, AlertStatus, Severity
from esg_risk_core.lifecycle import SORT_KEYS, AlertFilter, AlertSortKey, query_alerts


@pytest.fixture
def alerts(make_alert, now):
    return [
        make_alert(
            title="Bravo",
            supplier_id="sup-1",
            severity=Severity.MEDIUM,
            detected_at=now - timedelta(days=3),
            due_date=now + timedelta(days=1),
        ),
        make_alert(
            title="alpha",
            supplier_id="sup-2",
            severity=Severity.CRITICAL,
            category=AlertCategory.SOCIAL,
            detected_at=now - timedelta(days=1),
            due_date=now + timedelta(days=9),
        ),
        make_alert(
            title="Charlie",
            supplier_id="sup-1",
            severity=Severity.LOW,
            status=AlertStatus.RESOLVED,
            detected_at=now - timedelta(days=10),
            due_date=now + timedelta(days=4),
        ),
    ]


def test_every_sort_key_has_a_comparator():
    assert set(SORT_KEYS) == set(AlertSortKey)


class TestFilter:
    def test_no_filter_returns_newest_first(self, alerts) -> None:
        assert [a.title for a in query_alerts(alerts)] == ["alpha", "Bravo", "Charlie"]

    def test_filter_by_supplier_and_status(self, alerts) -> None:
        result = query_alerts(alerts, AlertFilter(supplier_id="sup-1", status=AlertStatus.OPEN))
        assert [a.title for a in result] == ["Bravo"]

    def test_filter_by_severity_and_category(self, alerts) -> None:
        assert [a.title for a in query_alerts(alerts, AlertFilter(severity=Severity.LOW))] == [
            "Charlie"
        ]
        assert [
            a.title for a in query_alerts(alerts, AlertFilter(category=AlertCategory.SOCIAL))
        ] == ["alpha"]

    def test_filter_by_detection_range(self, alerts, now) -> None:
        window = AlertFilter(detected_from=now - timedelta(days=5), detected_to=now - timedelta(days=2))
        assert [a.title for a in query_alerts(alerts, window)] == ["Bravo"]


class TestSort:
    def test_title_is_case_insensitive(self, alerts) -> None:
        result = query_alerts(alerts, sort_key=AlertSortKey.TITLE, descending=False)
        assert [a.title for a in result] == ["alpha", "Bravo", "Charlie"]

    def test_severity_descending(self, alerts) -> None:
        result = query_alerts(alerts, sort_key=AlertSortKey.SEVERITY)
        assert [a.severity for a in result] == [Severity.CRITICAL, Severity.MEDIUM, Severity.LOW]

    def test_due_date_ascending_with_limit(self, alerts) -> None:
        result = query_alerts(alerts, sort_key=AlertSortKey.DUE_DATE, descending=False, limit=2)
        assert [a.title for a in result] == ["Bravo", "Charlie"]
