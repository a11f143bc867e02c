"""Test configuration and fixtures for zapctl."""

import tempfile
from collections.abc import Generator
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from zapctl.models import ConnectionTarget, PollPolicy


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def target() -> ConnectionTarget:
    return ConnectionTarget(host="zap.local", port=8090)


@pytest.fixture
def policy() -> PollPolicy:
    """Default ceiling with no real waiting."""
    return PollPolicy(interval=0.0, max_retries=30)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ZAPCTL_* variables from the developer's shell out of tests."""
    for name in (
        "ZAPCTL_HOST",
        "ZAPCTL_PORT",
        "ZAPCTL_API_KEY",
        "ZAPCTL_POLL_INTERVAL",
        "ZAPCTL_POLL_RETRIES",
        "ZAPCTL_REPORT",
        "ZAPCTL_VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


class RecordingReporter:
    """Progress reporter that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def write(self, text: str) -> None:
        self.events.append(("write", text))

    def ok(self, text: str = "OK") -> None:
        self.events.append(("ok", text))

    def warn(self, text: str) -> None:
        self.events.append(("warn", text))

    def error(self, text: str) -> None:
        self.events.append(("error", text))

    @property
    def markers(self) -> int:
        return sum(1 for kind, text in self.events if kind == "write" and text == ".")

    def texts(self, kind: str) -> list[str]:
        return [text for event_kind, text in self.events if event_kind == kind]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


def scripted(calls: list[str], name: str, results: list[Any]):
    """Async callable returning ``results`` in order, repeating the last one.

    Exceptions in ``results`` are raised instead of returned.
    """
    queue = list(results)

    async def call(*args: Any, **kwargs: Any) -> Any:
        calls.append(name)
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        return item

    return call


class FakeZAP:
    """Scripted replacement for ZAPClient with the same call groups."""

    def __init__(
        self,
        version: list[Any] | None = None,
        shutdown: list[Any] | None = None,
        spider_scan: list[Any] | None = None,
        spider_status: list[Any] | None = None,
        ascan_scan: list[Any] | None = None,
        ascan_status: list[Any] | None = None,
        records: list[Any] | None = None,
        alerts: list[Any] | None = None,
    ):
        self.calls: list[str] = []
        self.scan_args: list[tuple[Any, ...]] = []
        self.core = SimpleNamespace(
            version=scripted(self.calls, "core.version", version or ["2.15.0"]),
            shutdown=scripted(self.calls, "core.shutdown", shutdown or [{"Result": "OK"}]),
            alerts=scripted(self.calls, "core.alerts", alerts or [[]]),
        )
        self.spider = SimpleNamespace(
            scan=scripted(self.calls, "spider.scan", spider_scan or [{"scan": "0"}]),
            status=scripted(self.calls, "spider.status", spider_status or [{"status": 100}]),
        )
        ascan_start = scripted(self.calls, "ascan.scan", ascan_scan or [{"scan": "0"}])

        async def ascan_scan_recording(*args: Any, **kwargs: Any) -> Any:
            self.scan_args.append((*args, *kwargs.values()))
            return await ascan_start(*args, **kwargs)

        self.ascan = SimpleNamespace(
            scan=ascan_scan_recording,
            status=scripted(self.calls, "ascan.status", ascan_status or [{"status": 100}]),
        )
        self.pscan = SimpleNamespace(
            records_to_scan=scripted(
                self.calls, "pscan.recordsToScan", records or [{"recordsToScan": 0}]
            ),
        )

    async def __aenter__(self) -> "FakeZAP":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    def count(self, name: str) -> int:
        return self.calls.count(name)


class FakeProcess:
    """ScannerProcess stand-in with a scripted exit code sequence."""

    def __init__(self, returncodes: list[int | None] | None = None):
        self._returncodes = list(returncodes or [None])
        self.started = False
        self.killed = False
        self.pid = 4242

    def start(self) -> None:
        self.started = True

    def returncode(self) -> int | None:
        if self.killed:
            return -9
        if len(self._returncodes) > 1:
            return self._returncodes.pop(0)
        return self._returncodes[0]

    def kill(self) -> None:
        self.killed = True
