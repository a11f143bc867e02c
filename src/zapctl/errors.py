"""Exception hierarchy for zapctl steps."""

import json
from typing import Any


class ZapctlError(Exception):
    """Base class for every failure a zapctl step can surface."""


class ArgumentError(ZapctlError):
    """A required step option is missing or malformed."""


class ScannerError(ZapctlError):
    """A remote call to the scanner did not produce a usable result."""


class ScannerUnavailableError(ScannerError):
    """The scanner could not be reached (connection refused, timeout, reset)."""

    def __init__(self, message: str = "ZAProxy does not appear to be running."):
        super().__init__(message)


class ScannerAPIError(ScannerError):
    """The scanner answered, but with an error status or error payload."""

    def __init__(self, message: str, payload: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.payload = payload
        self.status_code = status_code


class ScanStartError(ScannerError):
    """The scanner refused to start a spider or active scan."""

    def __init__(self, label: str, payload: Any):
        self.label = label
        self.payload = payload
        super().__init__(f"{label} Error: {_pretty(payload)}")


class ProcessExitError(ZapctlError):
    """The scanner process terminated before it became ready."""

    def __init__(self, returncode: int | None, detail: str = ""):
        self.returncode = returncode
        message = f"Error launching ZAProxy: {returncode}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class FindingsPresentError(ZapctlError):
    """Teardown finished, but the alert step recorded unignored findings."""

    def __init__(self, report: Any):
        self.report = report
        count = len(getattr(report, "alerts", None) or [])
        super().__init__(f"Alert check failed: {count} unignored alert(s) were found.")


def _pretty(payload: Any) -> str:
    if isinstance(payload, BaseException):
        payload = {"error": type(payload).__name__, "message": str(payload)}
    try:
        return json.dumps(payload, indent=2, default=str)
    except (TypeError, ValueError):
        return str(payload)
