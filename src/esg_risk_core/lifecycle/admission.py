import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from esg_risk_core.domain import AlertCategory, AlertDraft, ComplianceAlert, Err, Ok, Result
from esg_risk_core.lifecycle.locks import KeyedLocks
from esg_risk_core.lifecycle.service import AlertLifecycle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Admission:
    alert: ComplianceAlert
    created: bool


class AlertAdmission:
    """Admits drafts with at most one Open alert per (supplier, category).

    Admissions sharing a key are serialized so that concurrent scans or manual
    creations cannot both open an alert for the same violation.
    """

    def __init__(self, lifecycle: AlertLifecycle) -> None:
        self._lifecycle = lifecycle
        self._locks: KeyedLocks[tuple[str, AlertCategory]] = KeyedLocks()

    async def admit(self, draft: AlertDraft, due_date: datetime | None = None) -> Result[Admission]:
        key = draft.idempotency_key
        async with self._locks.hold(key):
            existing = await self._lifecycle.store.find_open(*key)
            if existing is not None:
                logger.info(
                    "Skipping draft %r: alert %s already open for supplier %s (%s)",
                    draft.title,
                    existing.id,
                    draft.supplier_id,
                    draft.category.value,
                )
                return Ok(Admission(alert=existing, created=False))

            result = await self._lifecycle.create(draft, due_date)
            if isinstance(result, Err):
                return result
            return Ok(Admission(alert=result.value, created=True))

    async def admit_all(self, drafts: Sequence[AlertDraft]) -> list[Result[Admission]]:
        return [await self.admit(draft) for draft in drafts]
