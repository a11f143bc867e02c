"""Shared CLI app objects and step runner."""

from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from zapctl.config import StepOptions, resolve_options
from zapctl.errors import ZapctlError
from zapctl.models import StepResult
from zapctl.reporting import ConsoleReporter, ProgressReporter
from zapctl.utils import setup_logging

from .deps import cli_module

app = typer.Typer(
    name="zapctl",
    help="Drive a ZAP scanner through start, spider, scan, alert and stop pipeline steps",
    no_args_is_help=True,
)
console = Console()

HOST_OPTION = typer.Option(None, "--host", help="Scanner API host [default: localhost]")
PORT_OPTION = typer.Option(None, "--port", help="Scanner API port [default: 8080]")
API_KEY_OPTION = typer.Option(None, "--api-key", help="Scanner API key, if one is configured")
CONFIG_FILE_OPTION = typer.Option(
    None, "--config-file", help="Options file [default: ./zapctl.yml when present]"
)
POLL_INTERVAL_OPTION = typer.Option(
    None, "--poll-interval", help="Seconds between status checks [default: 1.0]"
)
POLL_RETRIES_OPTION = typer.Option(
    None, "--poll-retries", help="Status checks before giving up [default: 30]"
)
STRICT_OPTION = typer.Option(
    None, "--strict/--no-strict", help="Fail the step when a wait gives up"
)
VERBOSE_OPTION = typer.Option(None, "--verbose/--quiet", help="Debug logging")
REPORT_OPTION = typer.Option(
    None, "--report", help="Alert report file [default: .zapctl/alerts.json]"
)

StepAction = Callable[[StepOptions, ProgressReporter], Coroutine[Any, Any, Any]]


def run_step(
    step: str,
    overrides: dict[str, Any],
    action: StepAction,
    config_file: Path | None = None,
) -> Any:
    """Resolve options, run one step and map its errors to an exit code."""
    cli = cli_module()
    try:
        options = resolve_options(step, overrides, config_file)
    except ZapctlError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    setup_logging(options.verbose)
    reporter = ConsoleReporter(console)
    try:
        result = cli.safe_async_run(action(options, reporter))
    except ZapctlError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    if isinstance(result, StepResult) and result.gave_up and options.strict:
        console.print(f"[red]{step} gave up: {escape(result.detail)}[/red]")
        raise typer.Exit(1)
    return result


def common_overrides(
    host: str | None,
    port: int | None,
    api_key: str | None,
    poll_interval: float | None,
    poll_retries: int | None,
    strict: bool | None,
    verbose: bool | None,
) -> dict[str, Any]:
    """Collect the flags every step accepts into an overrides mapping."""
    return {
        "host": host,
        "port": port,
        "api_key": api_key,
        "poll_interval": poll_interval,
        "poll_retries": poll_retries,
        "strict": strict,
        "verbose": verbose,
    }
