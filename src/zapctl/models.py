"""Data models shared by the orchestration steps."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

Alert = dict[str, Any]


@dataclass(frozen=True)
class ConnectionTarget:
    """Where the scanner's control API listens."""

    host: str = "localhost"
    port: int = 8080
    api_key: str | None = None

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class ScanKind(str, Enum):
    """Scan jobs the sequencer knows how to start and wait for."""

    SPIDER = "spider"
    ACTIVE_SCAN = "ascan"

    @property
    def label(self) -> str:
        return "Spider" if self is ScanKind.SPIDER else "Scan"

    @property
    def progress_label(self) -> str:
        return "Spidering" if self is ScanKind.SPIDER else "Scanning"


@dataclass(frozen=True)
class PollPolicy:
    """Fixed-interval retry settings for every wait."""

    interval: float = 1.0
    max_retries: int = 30

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError("poll interval must not be negative")
        if self.max_retries < 0:
            raise ValueError("poll retries must not be negative")


class StepOutcome(str, Enum):
    """How a step ended when it did not raise."""

    OK = "ok"
    GAVE_UP = "gave_up"
    ALREADY_DOWN = "already_down"
    FINDINGS = "findings"


@dataclass
class StepResult:
    """Outcome of one pipeline step."""

    step: str
    outcome: StepOutcome
    detail: str = ""
    value: Any = None

    @property
    def gave_up(self) -> bool:
        return self.outcome is StepOutcome.GAVE_UP


@dataclass
class AlertReport:
    """Verdict of the alert step, handed to the teardown step."""

    failed: bool
    alerts: list[Alert] = field(default_factory=list)
    ignored: int = 0
    drained: bool = True

    @classmethod
    def from_alerts(
        cls, remaining: list[Alert], ignored: int = 0, drained: bool = True
    ) -> "AlertReport":
        return cls(
            failed=len(remaining) > 0, alerts=list(remaining), ignored=ignored, drained=drained
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "failed": self.failed,
            "ignored": self.ignored,
            "drained": self.drained,
            "alerts": list(self.alerts),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlertReport":
        """Rebuild a report without re-deriving the verdict from its alerts."""
        if not isinstance(data.get("failed"), bool):
            raise ValueError("alert report is missing a boolean 'failed' field")
        alerts = data.get("alerts", [])
        if not isinstance(alerts, list):
            raise ValueError("alert report 'alerts' must be a list")
        return cls(
            failed=data["failed"],
            alerts=[a for a in alerts if isinstance(a, dict)],
            ignored=int(data.get("ignored", 0)),
            drained=bool(data.get("drained", True)),
        )
