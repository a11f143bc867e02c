"""Tests for the alert report hand-off between steps."""

import json
from pathlib import Path

import pytest

from zapctl.errors import ArgumentError
from zapctl.models import AlertReport
from zapctl.verdict import clear_report, load_report, save_report


def test_verdict_follows_remaining_alerts() -> None:
    assert AlertReport.from_alerts([{"alert": "SQLi"}]).failed is True
    assert AlertReport.from_alerts([]).failed is False


def test_saved_report_is_loaded_back(temp_dir: Path) -> None:
    report = AlertReport.from_alerts([{"alert": "SQLi", "risk": "High"}], ignored=2)
    path = save_report(report, temp_dir / "nested" / "alerts.json")

    loaded = load_report(path)

    assert loaded == report


def test_missing_report_means_no_verdict(temp_dir: Path) -> None:
    assert load_report(temp_dir / "alerts.json") is None


def test_failed_flag_is_not_recomputed(temp_dir: Path) -> None:
    path = temp_dir / "alerts.json"
    path.write_text(json.dumps({"failed": False, "alerts": [{"alert": "SQLi"}]}))

    assert load_report(path).failed is False


@pytest.mark.parametrize(
    "content",
    ["not json", "[]", json.dumps({"alerts": []}), json.dumps({"failed": True, "alerts": {}})],
)
def test_malformed_report_is_an_argument_error(temp_dir: Path, content: str) -> None:
    path = temp_dir / "alerts.json"
    path.write_text(content)

    with pytest.raises(ArgumentError):
        load_report(path)


def test_clear_report(temp_dir: Path) -> None:
    path = save_report(AlertReport.from_alerts([]), temp_dir / "alerts.json")

    assert clear_report(path) is True
    assert not path.exists()
    assert clear_report(path) is False


def test_drain_state_survives_the_hand_off(temp_dir: Path) -> None:
    path = save_report(AlertReport.from_alerts([], drained=False), temp_dir / "alerts.json")

    assert load_report(path).drained is False


def test_report_without_drain_state_counts_as_drained(temp_dir: Path) -> None:
    path = temp_dir / "alerts.json"
    path.write_text(json.dumps({"failed": False, "alerts": []}))

    assert load_report(path).drained is True
