"""Logging setup for CLI sessions.

Verbose mode routes module loggers through rich so that debug lines interleave
cleanly with step progress output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "zapctl-rich"


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure the ``zapctl`` logger: DEBUG when verbose, WARNING otherwise."""
    logger = logging.getLogger("zapctl")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        return
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
