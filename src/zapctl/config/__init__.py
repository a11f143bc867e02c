"""
Configuration management for zapctl.

Supports multiple configuration sources in order of priority:
1. Command-line flags (highest priority)
2. Environment variables (ZAPCTL_*)
3. Step section of zapctl.yml
4. Shared ``options`` section of zapctl.yml
5. Default values (lowest priority)
"""

from .env_loader import CONFIG_FILENAME, ENV_KEYS, load_config_file, load_env_config
from .getters import (
    DEFAULT_REPORT_PATH,
    DEFAULTS,
    STEPS,
    StepOptions,
    get_option,
    parse_config_pairs,
    resolve_options,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_REPORT_PATH",
    "DEFAULTS",
    "ENV_KEYS",
    "STEPS",
    "StepOptions",
    "get_option",
    "load_config_file",
    "load_env_config",
    "parse_config_pairs",
    "resolve_options",
]
