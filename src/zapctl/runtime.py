"""Process handle for the scanner launcher."""

import logging
import shlex
import shutil
import subprocess
from collections.abc import Mapping
from pathlib import Path

from zapctl.errors import ProcessExitError

logger = logging.getLogger(__name__)

DEFAULT_LAUNCHER = "zap.sh"


def resolve_binary(name: str, path: str | Path | None = None) -> str | None:
    """Return the launcher to execute, looked up in ``path`` first, then ``PATH``."""
    if path:
        candidate = Path(path).expanduser() / name
        if candidate.is_file():
            return str(candidate)
        return None
    return shutil.which(name)


def build_launch_args(daemon: bool = True, config: Mapping[str, object] | None = None) -> list[str]:
    """Translate start options into scanner command-line arguments."""
    args: list[str] = []
    if daemon:
        args.append("-daemon")
    for key, value in (config or {}).items():
        args.extend(["-config", f"{key}={value}"])
    return args


class ScannerProcess:
    """A spawned scanner that keeps running after zapctl exits.

    The child is started in its own session so that the ``start`` step can
    return while the scanner keeps serving the later steps.
    """

    def __init__(
        self,
        args: list[str],
        launcher: str = DEFAULT_LAUNCHER,
        path: str | Path | None = None,
        log_file: str | Path | None = None,
    ):
        self.args = list(args)
        self.launcher = launcher
        self.path = path
        self.log_file = Path(log_file) if log_file else None
        self._process: subprocess.Popen | None = None

    @property
    def command(self) -> list[str]:
        executable = resolve_binary(self.launcher, self.path)
        if executable is None:
            executable = str(Path(self.path) / self.launcher) if self.path else self.launcher
        return [executable, *self.args]

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process else None

    def start(self) -> None:
        command = self.command
        logger.debug("launching: %s", " ".join(shlex.quote(part) for part in command))
        try:
            if self.log_file:
                self.log_file.parent.mkdir(parents=True, exist_ok=True)
                with self.log_file.open("ab") as output:
                    self._spawn(command, output, subprocess.STDOUT)
            else:
                self._spawn(command, subprocess.DEVNULL, subprocess.DEVNULL)
        except OSError as exc:
            culprit = exc.filename or command[0]
            raise ProcessExitError(None, f"{culprit}: {exc.strerror or exc}") from exc

    def _spawn(self, command: list[str], stdout, stderr) -> None:
        self._process = subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=stdout,
            stderr=stderr,
            start_new_session=True,
        )

    def returncode(self) -> int | None:
        """Exit code if the process has terminated, else ``None``."""
        if self._process is None:
            return None
        return self._process.poll()

    def kill(self) -> None:
        """Forcefully terminate the scanner (SIGKILL)."""
        if self._process is None or self._process.poll() is not None:
            return
        logger.debug("killing scanner pid %s", self._process.pid)
        self._process.kill()
        try:
            self._process.wait(timeout=3.0)
        except subprocess.TimeoutExpired:
            logger.warning("scanner pid %s did not exit after SIGKILL", self._process.pid)
