"""spider and scan commands."""

from pathlib import Path

import typer

from zapctl.config import StepOptions
from zapctl.models import ScanKind, StepResult
from zapctl.reporting import ProgressReporter

from .deps import cli_module
from .shared import (
    API_KEY_OPTION,
    CONFIG_FILE_OPTION,
    HOST_OPTION,
    POLL_INTERVAL_OPTION,
    POLL_RETRIES_OPTION,
    PORT_OPTION,
    STRICT_OPTION,
    VERBOSE_OPTION,
    app,
    common_overrides,
    run_step,
)

URL_OPTION = typer.Option(None, "--url", "-u", help="Target URL (required)")


def _run_job(step: str, kind: ScanKind, overrides: dict, config_file: Path | None) -> None:
    async def action(options: StepOptions, reporter: ProgressReporter) -> StepResult:
        cli = cli_module()
        async with cli.ZAPClient(options.target) as client:
            return await cli.run_job(
                client, kind, options.url, policy=options.policy, reporter=reporter
            )

    run_step(step, overrides, action, config_file)


@app.command()
def spider(
    url: str | None = URL_OPTION,
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    api_key: str | None = API_KEY_OPTION,
    poll_interval: float | None = POLL_INTERVAL_OPTION,
    poll_retries: int | None = POLL_RETRIES_OPTION,
    strict: bool | None = STRICT_OPTION,
    verbose: bool | None = VERBOSE_OPTION,
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Spider the target URL and wait for the crawl to finish."""
    overrides = common_overrides(host, port, api_key, poll_interval, poll_retries, strict, verbose)
    overrides["url"] = url
    _run_job("spider", ScanKind.SPIDER, overrides, config_file)


@app.command()
def scan(
    url: str | None = URL_OPTION,
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    api_key: str | None = API_KEY_OPTION,
    poll_interval: float | None = POLL_INTERVAL_OPTION,
    poll_retries: int | None = POLL_RETRIES_OPTION,
    strict: bool | None = STRICT_OPTION,
    verbose: bool | None = VERBOSE_OPTION,
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Actively scan the target URL and wait for the scan to finish."""
    overrides = common_overrides(host, port, api_key, poll_interval, poll_retries, strict, verbose)
    overrides["url"] = url
    _run_job("scan", ScanKind.ACTIVE_SCAN, overrides, config_file)
