"""Option resolution for pipeline steps."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from zapctl.errors import ArgumentError
from zapctl.models import ConnectionTarget, PollPolicy
from zapctl.runtime import DEFAULT_LAUNCHER

from .env_loader import load_config_file, load_env_config

STEPS = ("start", "stop", "spider", "scan", "alert")
DEFAULT_REPORT_PATH = ".zapctl/alerts.json"

DEFAULTS: dict[str, Any] = {
    "host": "localhost",
    "port": 8080,
    "api_key": None,
    "poll_interval": 1.0,
    "poll_retries": 30,
    "verbose": False,
    "strict": False,
    "daemon": True,
    "config": {},
    "launcher": DEFAULT_LAUNCHER,
    "path": None,
    "log_file": None,
    "url": None,
    "ignore": [],
    "report": DEFAULT_REPORT_PATH,
}


@dataclass
class StepOptions:
    """Fully resolved options for one step invocation."""

    step: str
    host: str = "localhost"
    port: int = 8080
    api_key: str | None = None
    poll_interval: float = 1.0
    poll_retries: int = 30
    verbose: bool = False
    strict: bool = False
    daemon: bool = True
    config: dict[str, str] = field(default_factory=dict)
    launcher: str = DEFAULT_LAUNCHER
    path: str | None = None
    log_file: str | None = None
    url: str | None = None
    ignore: list[str] = field(default_factory=list)
    report: str = DEFAULT_REPORT_PATH

    @property
    def target(self) -> ConnectionTarget:
        return ConnectionTarget(host=self.host, port=self.port, api_key=self.api_key)

    @property
    def policy(self) -> PollPolicy:
        return PollPolicy(interval=self.poll_interval, max_retries=self.poll_retries)


def _given(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, dict)) and not value:
        return False
    return True


def get_option(
    key: str,
    step: str,
    overrides: dict[str, Any] | None = None,
    file_config: dict[str, Any] | None = None,
    env_config: dict[str, str] | None = None,
) -> Any:
    """
    Get an option value with priority:
    1. Command-line flag
    2. Environment variable
    3. Step section of the config file
    4. Shared ``options`` section of the config file
    5. Default value
    """
    overrides = overrides or {}
    file_config = file_config or {}
    env_config = env_config or {}

    if _given(overrides.get(key)):
        return overrides[key]

    if key in env_config:
        return env_config[key]

    for section_name in (step, "options"):
        section = file_config.get(section_name) or {}
        if isinstance(section, dict) and section.get(key) is not None:
            return section[key]

    return DEFAULTS.get(key)


def coerce_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off", ""}:
        return False
    raise ArgumentError(f"{name} must be true or false, got {value!r}")


def coerce_int(value: Any, name: str, minimum: int = 0) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"{name} must be an integer, got {value!r}") from exc
    if number < minimum:
        raise ArgumentError(f"{name} must be at least {minimum}, got {number}")
    return number


def coerce_float(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"{name} must be a number, got {value!r}") from exc
    if number < 0:
        raise ArgumentError(f"{name} must not be negative, got {number}")
    return number


def parse_config_pairs(pairs: list[str] | None) -> dict[str, str]:
    """Turn repeated ``KEY=VALUE`` flags into a mapping, later keys winning."""
    config: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ArgumentError(f"config entries must look like KEY=VALUE, got {pair!r}")
        config[key.strip()] = value
    return config


def _coerce_mapping(value: Any, name: str) -> dict[str, str]:
    if not isinstance(value, dict):
        raise ArgumentError(f"{name} must be a mapping of strings")
    mapping: dict[str, str] = {}
    for key, item in value.items():
        if item is None:
            item = ""
        elif isinstance(item, bool):
            # yaml turns ``true`` into a bool; the scanner expects the literal word
            item = str(item).lower()
        mapping[str(key)] = str(item)
    return mapping


def _coerce_list(value: Any, name: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ArgumentError(f"{name} must be a list of strings")
    return [str(item) for item in value]


def resolve_options(
    step: str,
    overrides: dict[str, Any] | None = None,
    config_file: Path | None = None,
) -> StepOptions:
    """Merge flags, environment, config file and defaults for ``step``."""
    if step not in STEPS:
        raise ArgumentError(f"Unknown step {step!r}")
    overrides = dict(overrides or {})
    file_config = load_config_file(config_file)
    env_config = load_env_config()

    def option(key: str) -> Any:
        return get_option(key, step, overrides, file_config, env_config)

    # Flags add to or replace entries from the file rather than discarding it.
    config = _coerce_mapping(get_option("config", step, None, file_config), "config")
    config.update(_coerce_mapping(overrides.get("config") or {}, "config"))

    url = option("url")
    api_key = option("api_key")
    path = option("path")
    log_file = option("log_file")
    return StepOptions(
        step=step,
        host=str(option("host")),
        port=coerce_int(option("port"), "port", minimum=1),
        api_key=str(api_key) if api_key else None,
        poll_interval=coerce_float(option("poll_interval"), "poll_interval"),
        poll_retries=coerce_int(option("poll_retries"), "poll_retries"),
        verbose=coerce_bool(option("verbose"), "verbose"),
        strict=coerce_bool(option("strict"), "strict"),
        daemon=coerce_bool(option("daemon"), "daemon"),
        config=config,
        launcher=str(option("launcher")),
        path=str(path) if path else None,
        log_file=str(log_file) if log_file else None,
        url=str(url) if url else None,
        ignore=_coerce_list(option("ignore"), "ignore"),
        report=str(option("report")),
    )
