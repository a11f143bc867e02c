"""Tests for the scanner JSON API client."""

import httpx
import pytest
import respx
from httpx import Response

from zapctl.api import ZAPClient
from zapctl.errors import ScannerAPIError, ScannerUnavailableError
from zapctl.models import ConnectionTarget

BASE = "http://zap.local:8090"


class TestZAPClient:
    @respx.mock
    async def test_version(self, target: ConnectionTarget) -> None:
        route = respx.get(f"{BASE}/JSON/core/view/version/").mock(
            return_value=Response(200, json={"version": "2.15.0"})
        )

        async with ZAPClient(target) as client:
            assert await client.core.version() == "2.15.0"

        assert route.called

    @respx.mock
    async def test_status_is_coerced_to_int(self, target: ConnectionTarget) -> None:
        respx.get(f"{BASE}/JSON/spider/view/status/").mock(
            return_value=Response(200, json={"status": "75"})
        )

        async with ZAPClient(target) as client:
            status = await client.spider.status()

        assert status["status"] == 75

    @respx.mock
    async def test_spider_scan_sends_url(self, target: ConnectionTarget) -> None:
        route = respx.get(f"{BASE}/JSON/spider/action/scan/").mock(
            return_value=Response(200, json={"scan": "1"})
        )

        async with ZAPClient(target) as client:
            await client.spider.scan("http://app.test/")

        assert route.calls.last.request.url.params["url"] == "http://app.test/"

    @respx.mock
    async def test_active_scan_sends_blank_policy_and_context(
        self, target: ConnectionTarget
    ) -> None:
        route = respx.get(f"{BASE}/JSON/ascan/action/scan/").mock(
            return_value=Response(200, json={"scan": "3"})
        )

        async with ZAPClient(target) as client:
            await client.ascan.scan("http://app.test/")

        params = route.calls.last.request.url.params
        assert params["url"] == "http://app.test/"
        assert params["scanPolicyName"] == ""
        assert params["contextId"] == ""

    @respx.mock
    async def test_records_to_scan(self, target: ConnectionTarget) -> None:
        respx.get(f"{BASE}/JSON/pscan/view/recordsToScan/").mock(
            return_value=Response(200, json={"recordsToScan": "12"})
        )

        async with ZAPClient(target) as client:
            result = await client.pscan.records_to_scan()

        assert result["recordsToScan"] == 12

    @respx.mock
    async def test_alerts_sends_blank_filters(self, target: ConnectionTarget) -> None:
        route = respx.get(f"{BASE}/JSON/core/view/alerts/").mock(
            return_value=Response(
                200, json={"alerts": [{"alert": "XSS", "risk": "High"}, "junk"]}
            )
        )

        async with ZAPClient(target) as client:
            alerts = await client.core.alerts()

        assert alerts == [{"alert": "XSS", "risk": "High"}]
        params = route.calls.last.request.url.params
        assert params["baseurl"] == ""
        assert params["start"] == ""
        assert params["count"] == ""

    @respx.mock
    async def test_api_key_is_sent_when_configured(self) -> None:
        route = respx.get(f"{BASE}/JSON/core/action/shutdown/").mock(
            return_value=Response(200, json={"Result": "OK"})
        )
        target = ConnectionTarget(host="zap.local", port=8090, api_key="s3cret")

        async with ZAPClient(target) as client:
            await client.core.shutdown()

        assert route.calls.last.request.url.params["apikey"] == "s3cret"

    @respx.mock
    async def test_api_key_is_omitted_by_default(self, target: ConnectionTarget) -> None:
        route = respx.get(f"{BASE}/JSON/core/view/version/").mock(
            return_value=Response(200, json={"version": "2.15.0"})
        )

        async with ZAPClient(target) as client:
            await client.core.version()

        assert "apikey" not in route.calls.last.request.url.params

    @respx.mock
    async def test_connection_error_is_unavailable(self, target: ConnectionTarget) -> None:
        respx.get(f"{BASE}/JSON/core/view/version/").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        async with ZAPClient(target) as client:
            with pytest.raises(ScannerUnavailableError):
                await client.core.version()

    @respx.mock
    async def test_timeout_is_unavailable(self, target: ConnectionTarget) -> None:
        respx.get(f"{BASE}/JSON/spider/view/status/").mock(
            side_effect=httpx.ReadTimeout("timed out")
        )

        async with ZAPClient(target) as client:
            with pytest.raises(ScannerUnavailableError):
                await client.spider.status()

    @respx.mock
    async def test_error_payload_becomes_api_error(self, target: ConnectionTarget) -> None:
        payload = {"code": "url_not_found", "message": "URL Not Found in the Scan Tree"}
        respx.get(f"{BASE}/JSON/spider/action/scan/").mock(
            return_value=Response(400, json=payload)
        )

        async with ZAPClient(target) as client:
            with pytest.raises(ScannerAPIError, match="URL Not Found") as excinfo:
                await client.spider.scan("http://missing.test/")

        assert excinfo.value.payload == payload
        assert excinfo.value.status_code == 400

    @respx.mock
    async def test_non_numeric_status_is_api_error(self, target: ConnectionTarget) -> None:
        respx.get(f"{BASE}/JSON/ascan/view/status/").mock(
            return_value=Response(200, json={"status": "does_not_exist"})
        )

        async with ZAPClient(target) as client:
            with pytest.raises(ScannerAPIError):
                await client.ascan.status()

    async def test_requires_context_manager(self, target: ConnectionTarget) -> None:
        client = ZAPClient(target)

        with pytest.raises(RuntimeError, match="async context manager"):
            await client.core.version()
