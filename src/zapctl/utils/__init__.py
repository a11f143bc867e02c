"""Shared helpers for the CLI."""

from .async_utils import safe_async_run
from .debug import setup_logging

__all__ = ["safe_async_run", "setup_logging"]
