"""Configuration file and environment loading."""

import os
from pathlib import Path
from typing import Any

import yaml

from zapctl.errors import ArgumentError

CONFIG_FILENAME = "zapctl.yml"

ENV_KEYS = {
    "host": "ZAPCTL_HOST",
    "port": "ZAPCTL_PORT",
    "api_key": "ZAPCTL_API_KEY",
    "poll_interval": "ZAPCTL_POLL_INTERVAL",
    "poll_retries": "ZAPCTL_POLL_RETRIES",
    "report": "ZAPCTL_REPORT",
    "verbose": "ZAPCTL_VERBOSE",
}


def load_config_file(config_path: Path | None = None) -> dict[str, Any]:
    """Load ``zapctl.yml`` from ``config_path`` or the working directory.

    An explicit path that does not exist is an error; a missing default file
    just means no file configuration.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path.cwd() / CONFIG_FILENAME
    if not path.exists():
        if explicit:
            raise ArgumentError(f"Config file not found: {path}")
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ArgumentError(f"Invalid config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ArgumentError(f"Config file {path} must contain a mapping")
    return data


def load_env_config() -> dict[str, str]:
    """Return zapctl settings present in the environment, keyed by option name."""
    values = {}
    for key, env_var in ENV_KEYS.items():
        value = os.environ.get(env_var)
        if value:
            values[key] = value
    return values
