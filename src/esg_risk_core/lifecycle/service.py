import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import datetime

from esg_risk_core.domain import (
    AlertDraft,
    AlertPatch,
    ComplianceAlert,
    ConflictError,
    Err,
    NotFoundError,
    Ok,
    RecordMeta,
    Result,
    stamp_created,
    stamp_updated,
    utcnow,
)
from esg_risk_core.lifecycle import transitions
from esg_risk_core.lifecycle.locks import KeyedLocks
from esg_risk_core.lifecycle.store import AlertStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
SupplierLookup = Callable[[str], Awaitable[bool]]
Transition = Callable[[ComplianceAlert, datetime], Result[ComplianceAlert]]


class AlertLifecycle:
    """Applies state transitions to stored alerts.

    Transitions on the same alert are serialized with a per-alert lock and
    written with an expected-version check, so a write racing another
    process's write fails with ``ConflictError`` instead of being lost.
    """

    def __init__(
        self,
        store: AlertStore,
        clock: Clock = utcnow,
        supplier_exists: SupplierLookup | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._supplier_exists = supplier_exists
        self._locks: KeyedLocks[str] = KeyedLocks()

    @property
    def store(self) -> AlertStore:
        return self._store

    async def create(
        self, draft: AlertDraft, due_date: datetime | None = None
    ) -> Result[ComplianceAlert]:
        if self._supplier_exists is not None and not await self._supplier_exists(draft.supplier_id):
            logger.warning("Rejected alert %r: unknown supplier %s", draft.title, draft.supplier_id)
            return Err(NotFoundError(f"Supplier {draft.supplier_id} not found"))

        now = self._clock()
        alert = transitions.new_alert(draft, due_date, record=stamp_created(RecordMeta(), now))
        await self._store.add(alert)

        logger.info(
            "Opened alert %s for supplier %s (%s, %s)",
            alert.id,
            alert.supplier_id,
            alert.category.value,
            alert.severity.name,
        )
        return Ok(alert)

    async def get(self, alert_id: str) -> Result[ComplianceAlert]:
        alert = await self._store.get(alert_id)
        if alert is None:
            return Err(NotFoundError(f"Alert {alert_id} not found"))
        return Ok(alert)

    async def _apply(self, alert_id: str, action: str, transition: Transition) -> Result[ComplianceAlert]:
        async with self._locks.hold(alert_id):
            current = await self._store.get(alert_id)
            if current is None:
                logger.warning("Cannot %s alert %s: not found", action, alert_id)
                return Err(NotFoundError(f"Alert {alert_id} not found"))

            now = self._clock()
            outcome = transition(current, now)
            if isinstance(outcome, Err):
                logger.warning("Cannot %s alert %s: %s", action, alert_id, outcome.error)
                return outcome

            updated = replace(
                outcome.value,
                version=current.version + 1,
                record=stamp_updated(current.record, now),
            )
            if not await self._store.replace(updated, expected_version=current.version):
                logger.warning("Cannot %s alert %s: modified concurrently", action, alert_id)
                return Err(ConflictError(f"Alert {alert_id} was modified concurrently"))

            logger.info("Alert %s: %s -> %s", alert_id, current.status.value, updated.status.value)
            return Ok(updated)

    async def update(self, alert_id: str, patch: AlertPatch) -> Result[ComplianceAlert]:
        return await self._apply(alert_id, "update", lambda a, now: transitions.apply_patch(a, patch))

    async def start_progress(self, alert_id: str) -> Result[ComplianceAlert]:
        return await self._apply(alert_id, "start", lambda a, now: transitions.start_progress(a))

    async def resolve(
        self, alert_id: str, resolved_by: str, notes: str | None = None
    ) -> Result[ComplianceAlert]:
        return await self._apply(
            alert_id,
            "resolve",
            lambda a, now: transitions.resolve(a, resolved_by, notes, now),
        )

    async def escalate(
        self, alert_id: str, escalated_to: str, reason: str | None = None
    ) -> Result[ComplianceAlert]:
        return await self._apply(
            alert_id,
            "escalate",
            lambda a, now: transitions.escalate(a, escalated_to, reason, now),
        )

    async def close(self, alert_id: str) -> Result[ComplianceAlert]:
        return await self._apply(alert_id, "close", lambda a, now: transitions.close(a))
