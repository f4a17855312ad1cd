import asyncio
import logging
import random
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any

import httpx

from esg_risk_core.api.convert import (
    alert_from_payload,
    alert_to_payload,
    emission_sample_from_payload,
    supplier_from_payload,
    supplier_risk_payload,
)
from esg_risk_core.api.exceptions import (
    AuthenticationError,
    RateLimitError,
    ResourceNotFoundError,
    ServerError,
)
from esg_risk_core.domain import (
    AlertCategory,
    AlertStatus,
    Classification,
    ComplianceAlert,
    EmissionSample,
    Severity,
    SupplierSnapshot,
)

logger = logging.getLogger(__name__)


class ESGMonitoringClient:
    """Async client for the ESG Monitoring REST API.

    Provides the reads the core consumes (active suppliers, active alerts,
    monthly emission totals) and the writes it hands back (alerts, supplier
    risk classification). Paged endpoints are walked to completion.

    Usage:
        async with ESGMonitoringClient(base_url, api_key) as client:
            suppliers = await client.list_active_suppliers()
    """

    MAX_RETRIES = 3
    BASE_BACKOFF = 1.0
    MAX_JITTER = 0.5
    PAGE_SIZE = 100

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ESGMonitoringClient":
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        if not self._client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        url = f"{self.base_url}{endpoint}"

        retries = 0
        while True:
            response = await self._client.request(
                method, url, params=params, json=json, headers=self._headers()
            )

            if response.status_code == 429:
                if retries >= self.MAX_RETRIES:
                    retry_after = response.headers.get("Retry-After")
                    raise RateLimitError(
                        "Rate limit exceeded after max retries",
                        retry_after=float(retry_after) if retry_after else None,
                        endpoint=endpoint,
                    )

                delay = self.BASE_BACKOFF * (2**retries) + random.uniform(0, self.MAX_JITTER)
                logger.warning("Rate limited on %s %s; retrying in %.2fs", method, endpoint, delay)
                await asyncio.sleep(delay)
                retries += 1
                continue

            if response.status_code == 401:
                raise AuthenticationError(endpoint=endpoint)

            if response.status_code == 404:
                raise ResourceNotFoundError(endpoint)

            if response.is_server_error:
                raise ServerError(
                    f"{method} {endpoint} failed with status {response.status_code}",
                    status_code=response.status_code,
                    endpoint=endpoint,
                )

            response.raise_for_status()
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

    async def _paged(self, endpoint: str, params: dict[str, Any]) -> AsyncIterator[dict[str, Any]]:
        page = 1
        while True:
            data = await self._request(
                "GET",
                endpoint,
                params={**params, "pageNumber": page, "pageSize": self.PAGE_SIZE},
            ) or {}
            items = data.get("data") or []
            for item in items:
                yield item

            total = int(data.get("totalCount") or 0)
            if not items or page * self.PAGE_SIZE >= total:
                return
            page += 1

    async def iter_active_suppliers(self) -> AsyncIterator[SupplierSnapshot]:
        async for item in self._paged("/api/Suppliers", {"isActive": "true"}):
            try:
                snapshot = supplier_from_payload(item)
            except (KeyError, ValueError, TypeError) as exc:
                logger.warning("Skipping supplier record %s: %s", item.get("id"), exc)
                continue
            yield snapshot

    async def list_active_suppliers(self) -> list[SupplierSnapshot]:
        return [s async for s in self.iter_active_suppliers()]

    async def list_active_alerts(
        self,
        supplier_id: str | None = None,
        severity: Severity | None = None,
        category: AlertCategory | None = None,
        status: AlertStatus | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[ComplianceAlert]:
        params: dict[str, Any] = {}
        if supplier_id is not None:
            params["supplierId"] = supplier_id
        if severity is not None:
            params["severity"] = severity.name.title()
        if category is not None:
            params["category"] = category.value
        if status is not None:
            params["status"] = status.value
        if date_from is not None:
            params["dateFrom"] = date_from.isoformat()
        if date_to is not None:
            params["dateTo"] = date_to.isoformat()

        return [alert_from_payload(item) async for item in self._paged("/api/ComplianceAlerts", params)]

    async def monthly_emission_totals(
        self,
        supplier_id: str | None = None,
        months: int = 12,
    ) -> list[EmissionSample]:
        params: dict[str, Any] = {"months": months}
        if supplier_id is not None:
            params["supplierId"] = supplier_id

        data = await self._request("GET", "/api/CarbonFootprint/trends", params=params) or {}
        return [emission_sample_from_payload(row) for row in data.get("monthlyData") or []]

    async def persist_alert(self, alert: ComplianceAlert) -> None:
        payload = alert_to_payload(alert)
        if alert.version == 0:
            await self._request("POST", "/api/ComplianceAlerts", json=payload)
        else:
            await self._request("PUT", f"/api/ComplianceAlerts/{alert.id}", json=payload)

    async def persist_supplier(self, supplier_id: str, classification: Classification) -> None:
        payload = supplier_risk_payload(
            supplier_id, classification.tier.name.title(), classification.rating
        )
        await self._request("PUT", f"/api/Suppliers/{supplier_id}/risk", json=payload)
