"""Passive-scan drain, alert fetch and ignore-list filtering."""

import asyncio
import json
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from zapctl.api import ZAPClient
from zapctl.errors import ScannerError, ScannerUnavailableError
from zapctl.models import Alert, AlertReport, PollPolicy, StepOutcome, StepResult
from zapctl.reporting import NullReporter, ProgressReporter

from .poller import PollStatus, passive_drained, wait_until


def filter_alerts(alerts: Iterable[Alert], ignore: Iterable[str]) -> list[Alert]:
    """Drop alerts whose ``alert`` name is in ``ignore``, keeping order."""
    ignored = set(ignore)
    return [alert for alert in alerts if alert.get("alert") not in ignored]


async def check_alerts(
    client: ZAPClient,
    ignore: Iterable[str] = (),
    *,
    policy: PollPolicy | None = None,
    reporter: ProgressReporter | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> AlertReport:
    """Wait for passive scanning, then evaluate alerts against ``ignore``.

    Findings never raise here. They are recorded in the returned report and the
    teardown step turns a failed report into a failed pipeline. If the passive
    queue never drained the report is still built, with ``drained`` false.
    """
    reporter = reporter or NullReporter()
    ignore = list(ignore)

    reporter.write("Waiting for scanning to finish: ")
    outcome = await wait_until(
        client.pscan.records_to_scan,
        passive_drained,
        policy=policy,
        on_interval=lambda: reporter.write("."),
        sleep=sleep,
    )
    if outcome.status is PollStatus.FAILED:
        reporter.error("FAILED")
        raise ScannerUnavailableError() from outcome.error
    if outcome.status is PollStatus.GAVE_UP:
        pending = outcome.value["recordsToScan"]
        reporter.warn(f"gave up with {pending} record(s) still queued")
    else:
        reporter.ok()

    reporter.write("Checking for alerts: ")
    try:
        alerts = await client.core.alerts("", "", "")
    except ScannerError as exc:
        reporter.error("FAILED")
        raise ScannerUnavailableError() from exc

    remaining = filter_alerts(alerts, ignore)
    report = AlertReport.from_alerts(
        remaining, ignored=len(alerts) - len(remaining), drained=outcome.ready
    )
    if report.failed:
        reporter.error("Alerts found: " + json.dumps(remaining, indent=2))
    else:
        reporter.ok()
    return report


def alert_step_result(report: AlertReport) -> StepResult:
    """Summarise an alert report as the ``alert`` step's outcome."""
    if not report.drained:
        return StepResult(
            "alert",
            StepOutcome.GAVE_UP,
            detail="passive scan queue did not drain before alerts were read",
            value=report,
        )
    if report.failed:
        return StepResult(
            "alert",
            StepOutcome.FINDINGS,
            detail=f"{len(report.alerts)} unignored alert(s)",
            value=report,
        )
    return StepResult("alert", StepOutcome.OK, value=report)
