"""Async client for the scanner's JSON control API."""

import logging
from typing import Any

import httpx

from zapctl.errors import ScannerAPIError, ScannerUnavailableError
from zapctl.models import Alert, ConnectionTarget

logger = logging.getLogger(__name__)


def _as_int(payload: dict[str, Any], key: str) -> int:
    try:
        return int(payload[key])
    except (KeyError, TypeError, ValueError) as exc:
        raise ScannerAPIError(f"Unexpected response, missing numeric '{key}'", payload=payload) from exc


class ZAPClient:
    """Async HTTP client for one scanner instance.

    Calls are grouped the way the scanner groups them: ``core``, ``spider``,
    ``ascan`` and ``pscan``. Every call raises ``ScannerUnavailableError`` when
    the scanner cannot be reached and ``ScannerAPIError`` when it answers with
    an error.
    """

    def __init__(
        self,
        target: ConnectionTarget,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.target = target
        self.timeout = timeout
        self._transport = transport
        self.client: httpx.AsyncClient | None = None
        self.core = CoreAPI(self)
        self.spider = SpiderAPI(self)
        self.ascan = ActiveScanAPI(self)
        self.pscan = PassiveScanAPI(self)

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            base_url=self.target.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def call(self, component: str, kind: str, name: str, **params: Any) -> dict[str, Any]:
        """Invoke ``/JSON/{component}/{kind}/{name}/`` and return the decoded body."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        query = {key: "" if value is None else value for key, value in params.items()}
        if self.target.api_key:
            query["apikey"] = self.target.api_key
        path = f"/JSON/{component}/{kind}/{name}/"

        try:
            response = await self.client.get(path, params=query)
        except httpx.TransportError as exc:
            logger.debug("%s %s failed: %s", self.target.base_url, path, exc)
            raise ScannerUnavailableError() from exc

        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        if response.status_code >= 400:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ScannerAPIError(
                message or f"{path} returned HTTP {response.status_code}",
                payload=payload,
                status_code=response.status_code,
            )
        if not isinstance(payload, dict):
            raise ScannerAPIError(f"{path} returned a non-JSON body", payload=payload)
        if "code" in payload and "message" in payload:
            raise ScannerAPIError(str(payload["message"]), payload=payload)
        return payload


class _Component:
    name = ""

    def __init__(self, api: ZAPClient):
        self._api = api

    async def _view(self, name: str, **params: Any) -> dict[str, Any]:
        return await self._api.call(self.name, "view", name, **params)

    async def _action(self, name: str, **params: Any) -> dict[str, Any]:
        return await self._api.call(self.name, "action", name, **params)


class CoreAPI(_Component):
    name = "core"

    async def version(self) -> str:
        payload = await self._view("version")
        return str(payload.get("version", ""))

    async def shutdown(self) -> dict[str, Any]:
        return await self._action("shutdown")

    async def alerts(self, baseurl: str = "", start: str = "", count: str = "") -> list[Alert]:
        payload = await self._view("alerts", baseurl=baseurl, start=start, count=count)
        alerts = payload.get("alerts", [])
        if not isinstance(alerts, list):
            raise ScannerAPIError("Unexpected response, 'alerts' is not a list", payload=payload)
        return [alert for alert in alerts if isinstance(alert, dict)]


class SpiderAPI(_Component):
    name = "spider"

    async def scan(self, url: str) -> dict[str, Any]:
        return await self._action("scan", url=url)

    async def status(self) -> dict[str, Any]:
        payload = await self._view("status")
        return {**payload, "status": _as_int(payload, "status")}


class ActiveScanAPI(_Component):
    name = "ascan"

    async def scan(self, url: str, scan_policy_name: str = "", context_id: str = "") -> dict[str, Any]:
        return await self._action(
            "scan", url=url, scanPolicyName=scan_policy_name, contextId=context_id
        )

    async def status(self) -> dict[str, Any]:
        payload = await self._view("status")
        return {**payload, "status": _as_int(payload, "status")}


class PassiveScanAPI(_Component):
    name = "pscan"

    async def records_to_scan(self) -> dict[str, Any]:
        payload = await self._view("recordsToScan")
        return {**payload, "recordsToScan": _as_int(payload, "recordsToScan")}
