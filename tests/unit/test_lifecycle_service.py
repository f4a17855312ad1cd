import asyncio
import logging
from datetime import timedelta

import pytest

from esg_risk_core.domain import (
    AlertCategory,
    AlertDraft,
    AlertPatch,
    AlertStatus,
    ConflictError,
    Err,
    ErrorKind,
    Ok,
    Severity,
)
from esg_risk_core.lifecycle import AlertLifecycle, AlertStore, InMemoryAlertStore


class StaleStore(InMemoryAlertStore):
    """Store whose versioned writes always lose to another writer."""

    async def replace(self, alert, expected_version):
        return False


@pytest.fixture
def store() -> InMemoryAlertStore:
    return InMemoryAlertStore()


@pytest.fixture
def lifecycle(store, now) -> AlertLifecycle:
    return AlertLifecycle(store, clock=lambda: now)


@pytest.fixture
def draft(now) -> AlertDraft:
    return AlertDraft(
        supplier_id="sup-1",
        title="Low Governance Score Alert",
        description="Governance score below threshold",
        severity=Severity.HIGH,
        category=AlertCategory.GOVERNANCE,
        detected_at=now - timedelta(hours=6),
    )


def test_in_memory_store_implements_protocol():
    assert isinstance(InMemoryAlertStore(), AlertStore)


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_opens_and_stores_alert(self, lifecycle, store, draft, now) -> None:
        result = await lifecycle.create(draft)

        assert isinstance(result, Ok)
        alert = result.value
        assert alert.status is AlertStatus.OPEN
        assert alert.version == 0
        assert alert.record.created_at == now
        assert alert.due_date == draft.detected_at + timedelta(days=7)
        assert await store.get(alert.id) == alert

    @pytest.mark.asyncio
    async def test_create_with_explicit_due_date(self, lifecycle, draft, now) -> None:
        alert = (await lifecycle.create(draft, due_date=now + timedelta(days=1))).unwrap()
        assert alert.due_date == now + timedelta(days=1)

    @pytest.mark.asyncio
    async def test_unknown_supplier_is_not_found(self, store, draft, now) -> None:
        async def supplier_exists(supplier_id: str) -> bool:
            return False

        lifecycle = AlertLifecycle(store, clock=lambda: now, supplier_exists=supplier_exists)

        result = await lifecycle.create(draft)

        assert isinstance(result, Err)
        assert result.kind is ErrorKind.NOT_FOUND
        assert len(store) == 0


class TestTransitions:
    @pytest.mark.asyncio
    async def test_full_lifecycle(self, lifecycle, draft, now) -> None:
        alert = (await lifecycle.create(draft)).unwrap()

        in_progress = (await lifecycle.start_progress(alert.id)).unwrap()
        assert in_progress.status is AlertStatus.IN_PROGRESS
        assert in_progress.version == 1
        assert in_progress.record.updated_at == now

        resolved = (await lifecycle.resolve(alert.id, "auditor", "Remediated")).unwrap()
        assert resolved.status is AlertStatus.RESOLVED
        assert resolved.resolved_at == now
        assert resolved.version == 2

        closed = (await lifecycle.close(alert.id)).unwrap()
        assert closed.status is AlertStatus.CLOSED
        assert closed.version == 3

    @pytest.mark.asyncio
    async def test_resolving_twice_conflicts_and_leaves_alert_unchanged(
        self, lifecycle, store, draft
    ) -> None:
        alert = (await lifecycle.create(draft)).unwrap()
        resolved = (await lifecycle.resolve(alert.id, "auditor")).unwrap()

        second = await lifecycle.resolve(alert.id, "someone-else", "again")

        assert isinstance(second, Err)
        assert second.kind is ErrorKind.CONFLICT
        assert await store.get(alert.id) == resolved

    @pytest.mark.asyncio
    async def test_escalate_closed_alert_conflicts(self, lifecycle, draft) -> None:
        alert = (await lifecycle.create(draft)).unwrap()
        await lifecycle.resolve(alert.id, "auditor")
        await lifecycle.close(alert.id)

        result = await lifecycle.escalate(alert.id, "cso", "late")

        assert result.kind is ErrorKind.CONFLICT
        with pytest.raises(ConflictError):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_update_applies_patch(self, lifecycle, draft) -> None:
        alert = (await lifecycle.create(draft)).unwrap()

        updated = (
            await lifecycle.update(alert.id, AlertPatch(description="Rechecked", severity=Severity.LOW))
        ).unwrap()

        assert updated.description == "Rechecked"
        assert updated.severity is Severity.LOW
        assert updated.status is AlertStatus.OPEN
        assert updated.version == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["start_progress", "close"])
    async def test_missing_alert_is_not_found(self, lifecycle, operation) -> None:
        result = await getattr(lifecycle, operation)("missing-id")
        assert result.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_get(self, lifecycle, draft) -> None:
        alert = (await lifecycle.create(draft)).unwrap()

        assert (await lifecycle.get(alert.id)).unwrap() == alert
        assert (await lifecycle.get("missing-id")).kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_transitions_are_logged(self, lifecycle, draft, caplog) -> None:
        alert = (await lifecycle.create(draft)).unwrap()

        with caplog.at_level(logging.INFO, logger="esg_risk_core.lifecycle.service"):
            await lifecycle.start_progress(alert.id)
            await lifecycle.start_progress(alert.id)

        assert "Open -> InProgress" in caplog.text
        assert "Cannot start alert" in caplog.text


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_stale_version_is_a_conflict(self, draft, now) -> None:
        store = StaleStore()
        lifecycle = AlertLifecycle(store, clock=lambda: now)
        alert = (await lifecycle.create(draft)).unwrap()

        result = await lifecycle.resolve(alert.id, "auditor")

        assert result.kind is ErrorKind.CONFLICT
        assert "modified concurrently" in result.error.message
        assert (await store.get(alert.id)).status is AlertStatus.OPEN

    @pytest.mark.asyncio
    async def test_concurrent_resolves_have_one_winner(self, lifecycle, draft) -> None:
        alert = (await lifecycle.create(draft)).unwrap()

        results = await asyncio.gather(
            lifecycle.resolve(alert.id, "first"),
            lifecycle.resolve(alert.id, "second"),
        )

        assert sum(1 for r in results if isinstance(r, Ok)) == 1
        assert sum(1 for r in results if isinstance(r, Err)) == 1

    @pytest.mark.asyncio
    async def test_locks_are_released_after_transitions(self, lifecycle, draft) -> None:
        for _ in range(50):
            alert = (await lifecycle.create(draft)).unwrap()
            await lifecycle.resolve(alert.id, "auditor")
            await lifecycle.close(alert.id)
        await lifecycle.resolve("missing", "auditor")

        assert len(lifecycle._locks) == 0
