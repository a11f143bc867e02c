"""Progress reporting for pipeline steps."""

from typing import Protocol

from rich.console import Console
from rich.markup import escape


class ProgressReporter(Protocol):
    """Sink for step progress: inline markers, then one summary line."""

    def write(self, text: str) -> None: ...

    def ok(self, text: str = "OK") -> None: ...

    def warn(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


class ConsoleReporter:
    """Writes progress to a rich console, e.g. ``Spidering: .....OK``."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def write(self, text: str) -> None:
        self.console.print(escape(text), end="", highlight=False)

    def ok(self, text: str = "OK") -> None:
        self.console.print(f"[green]{escape(text)}[/green]", highlight=False)

    def warn(self, text: str) -> None:
        self.console.print(f"[yellow]{escape(text)}[/yellow]", highlight=False)

    def error(self, text: str) -> None:
        self.console.print(f"[red]{escape(text)}[/red]", highlight=False)


class NullReporter:
    """Discards all progress output."""

    def write(self, text: str) -> None:
        pass

    def ok(self, text: str = "OK") -> None:
        pass

    def warn(self, text: str) -> None:
        pass

    def error(self, text: str) -> None:
        pass
