"""Start-up and teardown of the scanner process."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from zapctl.api import ZAPClient
from zapctl.errors import FindingsPresentError, ProcessExitError, ScannerError
from zapctl.models import AlertReport, PollPolicy, StepOutcome, StepResult
from zapctl.reporting import NullReporter, ProgressReporter
from zapctl.runtime import ScannerProcess

from .poller import wait_until

logger = logging.getLogger(__name__)


async def is_reachable(client: ZAPClient) -> bool:
    """True when the scanner answers a version request."""
    try:
        await client.core.version()
    except ScannerError:
        return False
    return True


async def start_scanner(
    client: ZAPClient,
    process: ScannerProcess,
    *,
    policy: PollPolicy | None = None,
    reporter: ProgressReporter | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> StepResult:
    """Launch the scanner and wait until its API responds.

    Raises ``ProcessExitError`` if the launcher exits non-zero first. If the API
    never comes up the process is killed and a ``GAVE_UP`` result is returned.
    """
    reporter = reporter or NullReporter()
    reporter.write("Starting ZAProxy: ")
    process.start()

    def check_exit() -> None:
        code = process.returncode()
        if code:
            raise ProcessExitError(code)

    async def probe() -> bool:
        check_exit()
        return await is_reachable(client)

    outcome = await wait_until(
        probe,
        lambda up: up,
        policy=policy,
        on_interval=lambda: reporter.write("."),
        sleep=sleep,
    )
    if outcome.ready:
        reporter.ok()
        return StepResult("start", StepOutcome.OK, value=process.pid)

    # The launcher may have died during the last wait.
    check_exit()
    reporter.warn("ZAProxy is taking too long, killing.")
    process.kill()
    return StepResult(
        "start",
        StepOutcome.GAVE_UP,
        detail=f"scanner did not respond after {outcome.attempts} attempts",
        value=process.pid,
    )


async def stop_scanner(
    client: ZAPClient,
    *,
    verdict: AlertReport | None = None,
    policy: PollPolicy | None = None,
    reporter: ProgressReporter | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> StepResult:
    """Shut the scanner down, then enforce the alert step's verdict.

    ``verdict`` is the report returned by the alert step, if it ran. A failed
    verdict raises ``FindingsPresentError`` once teardown has finished,
    whichever way teardown went.
    """
    reporter = reporter or NullReporter()
    reporter.write("Stopping ZAProxy: ")
    try:
        await client.core.shutdown()
    except ScannerError as exc:
        logger.debug("shutdown call failed: %s", exc)
        reporter.warn("ZAProxy does not appear to be running.")
        result = StepResult("stop", StepOutcome.ALREADY_DOWN, detail=str(exc))
    else:
        outcome = await wait_until(
            lambda: is_reachable(client),
            lambda up: not up,
            policy=policy,
            on_interval=lambda: reporter.write("."),
            sleep=sleep,
        )
        if outcome.ready:
            reporter.ok()
            result = StepResult("stop", StepOutcome.OK)
        else:
            reporter.warn("ZAProxy is taking too long, exiting.")
            result = StepResult(
                "stop",
                StepOutcome.GAVE_UP,
                detail=f"scanner still responding after {outcome.attempts} attempts",
            )

    if verdict is not None and verdict.failed:
        raise FindingsPresentError(verdict)
    return result
