"""Start a spider or active scan and wait for it to finish."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from zapctl.api import ZAPClient
from zapctl.errors import ArgumentError, ScannerError, ScanStartError
from zapctl.models import PollPolicy, ScanKind, StepOutcome, StepResult
from zapctl.reporting import NullReporter, ProgressReporter

from .poller import PollStatus, scan_complete, wait_until


def _bind(client: ZAPClient, kind: ScanKind) -> tuple[
    Callable[[str], Awaitable[Any]],
    Callable[[], Awaitable[dict[str, Any]]],
]:
    if kind is ScanKind.SPIDER:
        return client.spider.scan, client.spider.status
    return (
        lambda url: client.ascan.scan(url, scan_policy_name="", context_id=""),
        client.ascan.status,
    )


async def run_job(
    client: ZAPClient,
    kind: ScanKind,
    url: str | None,
    *,
    policy: PollPolicy | None = None,
    reporter: ProgressReporter | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> StepResult:
    """Start a scan of ``kind`` against ``url`` and wait for 100% status.

    Only one scan per kind is assumed to be in flight, so status is read for
    the scanner's current job rather than a job id. If the wait gives up the
    result is ``GAVE_UP`` with the last status seen.
    """
    if not url or not url.strip():
        raise ArgumentError("url must be defined.")

    reporter = reporter or NullReporter()
    start, status = _bind(client, kind)
    reporter.write(f"{kind.progress_label}: ")
    try:
        await start(url)
    except ScannerError as exc:
        reporter.error("FAILED")
        payload = getattr(exc, "payload", None) or exc
        raise ScanStartError(kind.label, payload) from exc

    outcome = await wait_until(
        status,
        scan_complete,
        policy=policy,
        on_interval=lambda: reporter.write("."),
        sleep=sleep,
    )
    if outcome.status is PollStatus.FAILED:
        reporter.error("FAILED")
        raise outcome.error
    if outcome.status is PollStatus.GAVE_UP:
        last = outcome.value["status"]
        reporter.warn(f"gave up waiting at {last}%")
        return StepResult(
            kind.value,
            StepOutcome.GAVE_UP,
            detail=f"{kind.label} still at {last}% after {outcome.attempts} attempts",
            value=last,
        )

    reporter.ok()
    return StepResult(kind.value, StepOutcome.OK, value=outcome.value["status"])


async def spider(client: ZAPClient, url: str | None, **kwargs: Any) -> StepResult:
    return await run_job(client, ScanKind.SPIDER, url, **kwargs)


async def active_scan(client: ZAPClient, url: str | None, **kwargs: Any) -> StepResult:
    return await run_job(client, ScanKind.ACTIVE_SCAN, url, **kwargs)
