"""Scan orchestration steps: lifecycle, scan jobs and alert evaluation."""

from .alerts import alert_step_result, check_alerts, filter_alerts
from .lifecycle import is_reachable, start_scanner, stop_scanner
from .poller import PollOutcome, PollStatus, passive_drained, scan_complete, wait_until
from .sequencer import active_scan, run_job, spider

__all__ = [
    "PollOutcome",
    "PollStatus",
    "active_scan",
    "alert_step_result",
    "check_alerts",
    "filter_alerts",
    "is_reachable",
    "passive_drained",
    "run_job",
    "scan_complete",
    "spider",
    "start_scanner",
    "stop_scanner",
    "wait_until",
]
