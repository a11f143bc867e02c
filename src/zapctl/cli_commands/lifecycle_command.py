"""start and stop commands."""

from pathlib import Path

import typer
from rich.markup import escape

from zapctl.config import StepOptions, parse_config_pairs
from zapctl.errors import ArgumentError
from zapctl.models import StepResult
from zapctl.reporting import ProgressReporter
from zapctl.runtime import build_launch_args
from zapctl.verdict import clear_report, load_report

from .deps import cli_module
from .shared import (
    API_KEY_OPTION,
    CONFIG_FILE_OPTION,
    HOST_OPTION,
    POLL_INTERVAL_OPTION,
    POLL_RETRIES_OPTION,
    PORT_OPTION,
    REPORT_OPTION,
    STRICT_OPTION,
    VERBOSE_OPTION,
    app,
    common_overrides,
    console,
    run_step,
)


@app.command()
def start(
    daemon: bool | None = typer.Option(
        None, "--daemon/--no-daemon", help="Run the scanner headless [default: daemon]"
    ),
    config: list[str] | None = typer.Option(
        None, "--config", "-c", help="Scanner config entry KEY=VALUE (repeatable)"
    ),
    path: str | None = typer.Option(None, "--path", help="Directory containing the launcher"),
    launcher: str | None = typer.Option(
        None, "--launcher", help="Launcher executable [default: zap.sh]"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Append scanner output to this file"
    ),
    report: str | None = REPORT_OPTION,
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    api_key: str | None = API_KEY_OPTION,
    poll_interval: float | None = POLL_INTERVAL_OPTION,
    poll_retries: int | None = POLL_RETRIES_OPTION,
    strict: bool | None = STRICT_OPTION,
    verbose: bool | None = VERBOSE_OPTION,
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Start the scanner and wait until its API responds."""
    try:
        config_pairs = parse_config_pairs(config)
    except ArgumentError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    overrides = common_overrides(host, port, api_key, poll_interval, poll_retries, strict, verbose)
    overrides.update(
        daemon=daemon,
        config=config_pairs,
        path=path,
        launcher=launcher,
        log_file=str(log_file) if log_file else None,
        report=report,
    )

    async def action(options: StepOptions, reporter: ProgressReporter) -> StepResult:
        cli = cli_module()
        # A new scanner means a new pipeline run; an old verdict must not leak into it.
        clear_report(Path(options.report))
        process = cli.ScannerProcess(
            build_launch_args(options.daemon, options.config),
            launcher=options.launcher,
            path=options.path,
            log_file=options.log_file,
        )
        async with cli.ZAPClient(options.target) as client:
            return await cli.start_scanner(
                client, process, policy=options.policy, reporter=reporter
            )

    run_step("start", overrides, action, config_file)


@app.command()
def stop(
    report: str | None = REPORT_OPTION,
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    api_key: str | None = API_KEY_OPTION,
    poll_interval: float | None = POLL_INTERVAL_OPTION,
    poll_retries: int | None = POLL_RETRIES_OPTION,
    strict: bool | None = STRICT_OPTION,
    verbose: bool | None = VERBOSE_OPTION,
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Shut the scanner down; fail if the alert step found unignored alerts."""
    overrides = common_overrides(host, port, api_key, poll_interval, poll_retries, strict, verbose)
    overrides["report"] = report

    async def action(options: StepOptions, reporter: ProgressReporter) -> StepResult:
        cli = cli_module()
        # Teardown runs even when the report is unreadable.
        load_error: ArgumentError | None = None
        try:
            verdict = load_report(Path(options.report))
        except ArgumentError as exc:
            verdict, load_error = None, exc
        async with cli.ZAPClient(options.target) as client:
            result = await cli.stop_scanner(
                client, verdict=verdict, policy=options.policy, reporter=reporter
            )
        if load_error is not None:
            raise load_error
        return result

    run_step("stop", overrides, action, config_file)
