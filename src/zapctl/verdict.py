"""Hand-off of the alert verdict between separately invoked steps."""

import json
import logging
from pathlib import Path

from zapctl.errors import ArgumentError
from zapctl.models import AlertReport

logger = logging.getLogger(__name__)


def save_report(report: AlertReport, path: Path) -> Path:
    """Write ``report`` as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
    return path


def load_report(path: Path) -> AlertReport | None:
    """Read a saved report; ``None`` when the alert step never wrote one."""
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ArgumentError(f"Could not read alert report {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ArgumentError(f"Alert report {path} must contain a JSON object")
    try:
        return AlertReport.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"Invalid alert report {path}: {exc}") from exc


def clear_report(path: Path) -> bool:
    """Remove a report left by an earlier pipeline run."""
    if not path.exists():
        return False
    logger.debug("removing stale alert report %s", path)
    path.unlink()
    return True
