"""CLI command modules registered on the shared typer app."""

from . import alert_command, lifecycle_command, scan_command
from .shared import app, console

__all__ = ["alert_command", "app", "console", "lifecycle_command", "scan_command"]
