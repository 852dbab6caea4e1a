"""Command line front end for running the engine on ledger exports"""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from runway_engine import service
from runway_engine.config import EngineSettings, load_settings
from runway_engine.domain.exceptions import DomainException
from runway_engine.infrastructure import ledger as ledger_io
from runway_engine.infrastructure.observability.logging import setup_logging
from runway_engine.schemas import PriceChangeSchema, report_to_dict

app = typer.Typer(help="Runway engine CLI: burn rate, runway and solvency from a transaction ledger.")
err_console = Console(stderr=True)


def _parse_today(raw: Optional[str]) -> date:
    if raw is None:
        return date.today()
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {raw!r}") from e


def _emit(payload, out: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2)
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        typer.echo(f"Report written to {out}")
    else:
        typer.echo(text)


def _fail(message: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(code=1)


def _bootstrap(log_level: Optional[str]) -> EngineSettings:
    """Load settings and configure logging (flag wins over RUNWAY_LOG_LEVEL)"""
    try:
        settings = load_settings()
    except DomainException as e:
        _fail(str(e))
    setup_logging((log_level or settings.log_level).upper())
    return settings


@app.command()
def analyze(
    ledger: Path = typer.Option(..., help="JSON ledger export (list of transactions)"),
    balance: float = typer.Option(..., help="Current balance summed across accounts"),
    today: Optional[str] = typer.Option(None, help="Analysis date YYYY-MM-DD (default: today)"),
    out: Optional[Path] = typer.Option(None, help="Write the report JSON here instead of stdout"),
    log_level: Optional[str] = typer.Option(None, help="Log level for structured logs on stderr"),
):
    """Build a financial health report."""
    settings = _bootstrap(log_level)
    as_of = _parse_today(today)
    try:
        history = ledger_io.load_transactions(ledger)
        report = service.analyze_health(history, Decimal(str(balance)), settings, as_of)
    except (DomainException, FileNotFoundError) as e:
        _fail(str(e))
    _emit(report_to_dict(report), out)


@app.command()
def simulate(
    ledger: Path = typer.Option(..., help="JSON ledger export (list of transactions)"),
    adjustments: Path = typer.Option(..., help="JSON list of what-if adjustments"),
    balance: float = typer.Option(..., help="Current balance summed across accounts"),
    today: Optional[str] = typer.Option(None, help="Analysis date YYYY-MM-DD (default: today)"),
    out: Optional[Path] = typer.Option(None, help="Write the report JSON here instead of stdout"),
    log_level: Optional[str] = typer.Option(None, help="Log level for structured logs on stderr"),
):
    """Build a report as if the given adjustments had happened."""
    settings = _bootstrap(log_level)
    as_of = _parse_today(today)
    try:
        history = ledger_io.load_transactions(ledger)
        changes = ledger_io.load_adjustments(adjustments)
        report = service.simulate(history, Decimal(str(balance)), changes, settings, as_of)
    except (DomainException, FileNotFoundError) as e:
        _fail(str(e))
    _emit(report_to_dict(report), out)


@app.command()
def creep(
    ledger: Path = typer.Option(..., help="JSON ledger export (list of transactions)"),
    today: Optional[str] = typer.Option(None, help="Analysis date YYYY-MM-DD (default: today)"),
    log_level: Optional[str] = typer.Option(None, help="Log level for structured logs on stderr"),
):
    """List recent subscription price increases."""
    settings = _bootstrap(log_level)
    as_of = _parse_today(today)
    try:
        history = ledger_io.load_transactions(ledger)
        changes = service.check_subscriptions(history, settings, as_of)
    except (DomainException, FileNotFoundError) as e:
        _fail(str(e))
    _emit([PriceChangeSchema.from_domain(c).model_dump(mode="json") for c in changes], None)


if __name__ == "__main__":
    app()
