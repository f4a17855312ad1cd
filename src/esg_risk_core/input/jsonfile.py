import json
import logging
from pathlib import Path
from typing import Any

from esg_risk_core.api.convert import supplier_from_payload
from esg_risk_core.domain import SupplierSnapshot

logger = logging.getLogger(__name__)


class JsonFileSupplierInput:
    """Reads supplier snapshots from a JSON export (array, or ``{"data": [...]}``).

    Records that cannot be converted are logged and skipped.
    """

    def __init__(self, file_path: str | Path) -> None:
        self._file_path = Path(file_path)
        self._records: list[dict[str, Any]] | None = None
        self._index: int = 0

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "JsonFileSupplierInput":
        instance = cls.__new__(cls)
        instance._file_path = Path("/dev/null")
        instance._records = records
        instance._index = 0
        return instance

    def _load(self) -> list[dict[str, Any]]:
        with self._file_path.open(encoding="utf-8") as handle:
            data = json.load(handle)
        if isinstance(data, dict):
            data = data.get("data") or []
        return list(data)

    def __aiter__(self) -> "JsonFileSupplierInput":
        return self

    async def __anext__(self) -> SupplierSnapshot:
        if self._records is None:
            self._records = self._load()

        while self._index < len(self._records):
            record = self._records[self._index]
            self._index += 1
            try:
                return supplier_from_payload(record)
            except (KeyError, ValueError, TypeError) as exc:
                logger.warning("Skipping supplier record %s: %s", record.get("id"), exc)

        raise StopAsyncIteration
