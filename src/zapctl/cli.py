"""zapctl CLI - ZAP scan pipeline steps."""

from zapctl.api import ZAPClient
from zapctl.cli_commands import app, console
from zapctl.orchestration import check_alerts, run_job, start_scanner, stop_scanner
from zapctl.runtime import ScannerProcess
from zapctl.utils import safe_async_run

__all__ = [
    "ScannerProcess",
    "ZAPClient",
    "app",
    "check_alerts",
    "console",
    "main",
    "run_job",
    "safe_async_run",
    "start_scanner",
    "stop_scanner",
    "version",
]


@app.command()
def version() -> None:
    """Show the installed zapctl version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("zapctl")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"zapctl {current_version}")


def main():
    """Entry point for the CLI."""
    app()
