"""Entry points wrapping the pure engine with logging and metrics"""

import logging
import time
import uuid
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from runway_engine.config import EngineSettings, load_settings
from runway_engine.domain.models import FinancialHealthReport, PriceChange, ScenarioAdjustment, Transaction
from runway_engine.domain.report import build_health_report
from runway_engine.domain.scenario import apply_adjustments
from runway_engine.domain.subscriptions import detect_price_creep
from runway_engine.infrastructure.observability.logging import log_analysis
from runway_engine.infrastructure.observability.metrics import (
    price_creep_counter,
    record_analysis,
    simulation_counter,
)

logger = logging.getLogger(__name__)


def analyze_health(
    history: Sequence[Transaction],
    current_balance: Decimal,
    settings: Optional[EngineSettings] = None,
    today: Optional[date] = None,
) -> FinancialHealthReport:
    """
    Build a health report for one account owner.

    Flow:
    1. Resolve settings (loaded from the environment unless given)
    2. Run the pure analysis
    3. Record metrics and a structured log line
    """
    settings = settings or load_settings()
    analysis_id = str(uuid.uuid4())
    start_time = time.perf_counter()

    report = build_health_report(history, current_balance, settings, today)

    duration = time.perf_counter() - start_time
    record_analysis(
        report.trend_direction.value,
        report.salary_source.value,
        report.runway_probability,
        duration,
    )
    log_analysis(
        analysis_id,
        len(history),
        report.salary_source.value,
        report.runway_probability,
        report.trend_direction.value,
        duration * 1000,
    )
    return report


def simulate(
    history: Sequence[Transaction],
    current_balance: Decimal,
    adjustments: Iterable[ScenarioAdjustment],
    settings: Optional[EngineSettings] = None,
    today: Optional[date] = None,
) -> FinancialHealthReport:
    """Analyze the ledger as if the what-if adjustments had happened"""
    today = today or date.today()
    adjustments = list(adjustments)
    simulated_history, simulated_balance = apply_adjustments(history, current_balance, adjustments, today)

    simulation_counter.inc()
    logger.info(
        "Running what-if simulation",
        extra={"step": "simulation", "adjustment_count": len(adjustments)},
    )
    return analyze_health(simulated_history, simulated_balance, settings, today)


def check_subscriptions(
    history: Sequence[Transaction],
    settings: Optional[EngineSettings] = None,
    today: Optional[date] = None,
) -> List[PriceChange]:
    """Detect recent subscription price increases"""
    settings = settings or load_settings()
    changes = detect_price_creep(history, settings, today or date.today())

    if changes:
        price_creep_counter.inc(len(changes))
        for change in changes:
            logger.warning(
                f"Subscription price increase: {change.name} +{change.change_percentage}%",
                extra={
                    "step": "price_creep",
                    "merchant": change.name,
                    "previous_amount": str(change.previous_amount),
                    "latest_amount": str(change.latest_amount),
                },
            )
    return changes
