"""CLI flow tests driven through Typer's runner"""

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from runway_engine.cli import app

DATA = Path(__file__).parent / "data"

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Commands reconfigure the root logger; put it back for other tests"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_analyze_and_simulate(tmp_path: Path):
    report_path = tmp_path / "report.json"
    sim_path = tmp_path / "sim.json"

    result = runner.invoke(
        app,
        [
            "analyze",
            "--ledger",
            str(DATA / "ledger.json"),
            "--balance",
            "25000",
            "--today",
            "2025-06-15",
            "--out",
            str(report_path),
        ],
    )
    assert result.exit_code == 0, result.stdout
    assert report_path.exists()

    baseline = json.loads(report_path.read_text())
    assert baseline["salary_source"] == "keyword"
    assert baseline["period_start"] == "2025-06-12"
    assert 0 <= baseline["runway_probability"] <= 100

    result_sim = runner.invoke(
        app,
        [
            "simulate",
            "--ledger",
            str(DATA / "ledger.json"),
            "--adjustments",
            str(DATA / "adjustments.json"),
            "--balance",
            "25000",
            "--today",
            "2025-06-15",
            "--out",
            str(sim_path),
        ],
    )
    assert result_sim.exit_code == 0, result_sim.stdout

    simulated = json.loads(sim_path.read_text())
    assert simulated["current_balance"] == pytest.approx(23800.0)
    assert simulated["true_daily_burn"] > baseline["true_daily_burn"]


def test_cli_creep():
    result = runner.invoke(
        app, ["creep", "--ledger", str(DATA / "ledger.json"), "--today", "2025-06-15", "--log-level", "ERROR"]
    )

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert [c["name"] for c in payload] == ["NETFLIX COM"]
    assert payload[0]["change_percentage"] == pytest.approx(5.03)


def test_cli_missing_ledger(tmp_path: Path):
    result = runner.invoke(app, ["analyze", "--ledger", str(tmp_path / "missing.json"), "--balance", "100"])

    assert result.exit_code == 1


def test_cli_rejects_bad_date():
    result = runner.invoke(
        app, ["analyze", "--ledger", str(DATA / "ledger.json"), "--balance", "100", "--today", "15/06/2025"]
    )

    assert result.exit_code != 0


def test_cli_invalid_environment_config(monkeypatch):
    monkeypatch.setenv("RUNWAY_ACTUARIAL_ALPHA", "2")

    result = runner.invoke(app, ["creep", "--ledger", str(DATA / "ledger.json"), "--today", "2025-06-15"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Invalid engine settings" in result.output
