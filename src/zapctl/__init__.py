"""zapctl package."""

from .api import ZAPClient
from .errors import (
    ArgumentError,
    FindingsPresentError,
    ProcessExitError,
    ScannerAPIError,
    ScannerError,
    ScannerUnavailableError,
    ScanStartError,
    ZapctlError,
)
from .models import AlertReport, ConnectionTarget, PollPolicy, ScanKind, StepOutcome, StepResult
from .orchestration import (
    active_scan,
    check_alerts,
    filter_alerts,
    run_job,
    spider,
    start_scanner,
    stop_scanner,
    wait_until,
)
from .runtime import ScannerProcess, build_launch_args

__all__ = [
    "AlertReport",
    "ArgumentError",
    "ConnectionTarget",
    "FindingsPresentError",
    "PollPolicy",
    "ProcessExitError",
    "ScanKind",
    "ScanStartError",
    "ScannerAPIError",
    "ScannerError",
    "ScannerProcess",
    "ScannerUnavailableError",
    "StepOutcome",
    "StepResult",
    "ZAPClient",
    "ZapctlError",
    "active_scan",
    "build_launch_args",
    "check_alerts",
    "filter_alerts",
    "run_job",
    "spider",
    "start_scanner",
    "stop_scanner",
    "wait_until",
]
