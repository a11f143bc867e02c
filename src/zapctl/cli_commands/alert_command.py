"""alert command."""

from pathlib import Path

import typer

from zapctl.config import StepOptions
from zapctl.models import StepResult
from zapctl.orchestration import alert_step_result
from zapctl.reporting import ProgressReporter
from zapctl.verdict import save_report

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
    run_step,
)


@app.command()
def alert(
    ignore: list[str] | None = typer.Option(
        None, "--ignore", "-i", help="Alert name to ignore (repeatable)"
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
    """Check alerts once passive scanning drains; the verdict is enforced by stop."""
    overrides = common_overrides(host, port, api_key, poll_interval, poll_retries, strict, verbose)
    overrides.update(ignore=ignore, report=report)

    async def action(options: StepOptions, reporter: ProgressReporter) -> StepResult:
        cli = cli_module()
        async with cli.ZAPClient(options.target) as client:
            verdict = await cli.check_alerts(
                client, options.ignore, policy=options.policy, reporter=reporter
            )
        save_report(verdict, Path(options.report))
        return alert_step_result(verdict)

    run_step("alert", overrides, action, config_file)
