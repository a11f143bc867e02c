"""Bounded fixed-interval polling."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from zapctl.errors import ScannerError
from zapctl.models import PollPolicy

logger = logging.getLogger(__name__)


class PollStatus(str, Enum):
    READY = "ready"
    FAILED = "failed"
    GAVE_UP = "gave_up"


@dataclass
class PollOutcome:
    """Result of a wait: ready with a value, failed with an error, or gave up."""

    status: PollStatus
    attempts: int
    value: Any = None
    error: ScannerError | None = None

    @property
    def ready(self) -> bool:
        return self.status is PollStatus.READY


async def wait_until(
    probe: Callable[[], Awaitable[Any]],
    is_ready: Callable[[Any], bool],
    *,
    policy: PollPolicy | None = None,
    on_interval: Callable[[], None] | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> PollOutcome:
    """Re-run ``probe`` every ``policy.interval`` seconds until ``is_ready``.

    A scanner error from the probe ends the wait at once as ``FAILED``. When the
    probe is still not ready after ``policy.max_retries`` retries the wait ends
    as ``GAVE_UP`` with the last value seen; giving up is not an error, the
    caller decides what it means.
    """
    policy = policy or PollPolicy()
    retries = 0
    attempts = 0
    while True:
        attempts += 1
        try:
            value = await probe()
        except ScannerError as exc:
            logger.debug("probe failed on attempt %d: %s", attempts, exc)
            return PollOutcome(PollStatus.FAILED, attempts, error=exc)

        if is_ready(value):
            return PollOutcome(PollStatus.READY, attempts, value=value)

        if on_interval:
            on_interval()
        retries += 1
        if retries > policy.max_retries:
            logger.debug("giving up after %d attempts", attempts)
            return PollOutcome(PollStatus.GAVE_UP, attempts, value=value)
        await sleep(policy.interval)


def scan_complete(value: dict[str, Any]) -> bool:
    return value["status"] >= 100


def passive_drained(value: dict[str, Any]) -> bool:
    return value["recordsToScan"] <= 0
