"""Financial health analysis engine - composes all components into the report"""

from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence

from runway_engine.config import EngineSettings
from runway_engine.domain.burn import estimate_burn
from runway_engine.domain.categories import analyze_categories, change_percentage, hybrid_baseline
from runway_engine.domain.classifier import classify_recurring, expense_stream, is_fixed_transaction
from runway_engine.domain.cycles import resolve_cycle
from runway_engine.domain.models import (
    BurnEstimate,
    FinancialHealthReport,
    Transaction,
    TrendDirection,
)
from runway_engine.domain.obligations import fixed_monthly_commitment, project_upcoming
from runway_engine.domain.survival import runway_days, survival_probability, value_at_risk
from runway_engine.utils.date_utils import add_months
from runway_engine.utils.money import quantize, to_money, total


def _between(expenses: Sequence[Transaction], start: date, end: date) -> List[Transaction]:
    """Expenses in the half-open interval [start, end)"""
    return [t for t in expenses if start <= t.date < end]


def _spend(expenses: Sequence[Transaction]) -> Decimal:
    return total(t.magnitude for t in expenses)


def trend_direction(burn: BurnEstimate, sensitivity: float) -> TrendDirection:
    """Recent (EWMA) burn against the plain window average, with a tolerance band"""
    if burn.weighted_mean > burn.simple_average * (1 + sensitivity):
        return TrendDirection.INCREASING
    if burn.weighted_mean < burn.simple_average * (1 - sensitivity):
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def build_health_report(
    history: Sequence[Transaction],
    current_balance: Decimal,
    settings: EngineSettings,
    today: Optional[date] = None,
) -> FinancialHealthReport:
    """
    Analyze a transaction ledger and current balance.

    Pure: no I/O, no shared state. Empty history yields a degenerate but
    valid report. One fixed-cost set is computed per call and used for burn,
    categories, upcoming obligations and projections alike.

    Args:
        history: Owner's transactions, any order (negative amount = expense)
        current_balance: Signed balance summed across accounts
        settings: Validated engine settings
        today: Analysis date (defaults to date.today())
    """
    today = today or date.today()
    if not isinstance(current_balance, Decimal):
        current_balance = Decimal(str(current_balance))

    cycle = resolve_cycle(history, settings, today)
    expenses = [t for t in expense_stream(history, settings) if t.date <= today]
    fixed_groups = classify_recurring(expenses, settings, today)

    this_period = [t for t in expenses if t.date >= cycle.period_start]
    prev_full = _between(expenses, cycle.prev_period_start, cycle.prev_period_end)
    prev_ptd = _between(expenses, cycle.prev_period_start, cycle.compare_date)

    spend_this_period = _spend(this_period)
    spend_prev_full = _spend(prev_full)
    spend_last_period = hybrid_baseline(_spend(prev_ptd), spend_prev_full, settings.pulse_baseline_threshold)

    # Same elapsed slice of the cycle one year earlier
    last_year_start = add_months(cycle.period_start, -12)
    last_year = _between(expenses, last_year_start, last_year_start + timedelta(days=cycle.days_into_period))
    spend_last_year = _spend(last_year)
    yoy = float(change_percentage(spend_this_period, spend_last_year)) if spend_last_year > 0 else None

    categories = analyze_categories(this_period, prev_ptd, prev_full, fixed_groups, settings)

    upcoming = project_upcoming(
        expenses, prev_full, this_period, fixed_groups, settings.recent_occurrence_count
    )
    upcoming_overhead = total(u.expected_amount for u in upcoming)

    variable_expenses = [t for t in expenses if not is_fixed_transaction(t, fixed_groups)]
    burn = estimate_burn(variable_expenses, settings.analysis_window_days, settings.actuarial_alpha, today)

    # Fixed and variable burn meet only here, so fixed costs are not counted twice
    fixed_monthly = fixed_monthly_commitment(
        expenses, prev_full + this_period, fixed_groups, settings.recent_occurrence_count
    )
    fixed_daily = float(fixed_monthly) / settings.fixed_cost_amortization_days
    true_daily_burn = burn.daily_burn + fixed_daily

    available = current_balance - upcoming_overhead
    safe, expected, optimistic = runway_days(float(available), true_daily_burn, burn.std_dev)

    days_until = cycle.days_until_next_salary
    projected_balance = available - to_money(burn.daily_burn * days_until)
    probability = survival_probability(
        float(projected_balance), burn.std_dev, days_until, settings.degrees_of_freedom
    )

    variable_this_period = _spend([t for t in this_period if not is_fixed_transaction(t, fixed_groups)])
    fixed_this_period = spend_this_period - variable_this_period
    projected_variable = (
        variable_this_period / Decimal(cycle.days_into_period) * Decimal(str(cycle.avg_cycle_days))
    )

    return FinancialHealthReport(
        current_balance=current_balance,
        variable_daily_burn=burn.daily_burn,
        fixed_daily_cost=fixed_daily,
        true_daily_burn=true_daily_burn,
        monthly_burn_rate=true_daily_burn * 30,
        burn_volatility=burn.std_dev,
        safe_runway_days=safe,
        expected_runway_days=expected,
        optimistic_runway_days=optimistic,
        value_at_risk_95=value_at_risk(burn.weighted_mean, burn.std_dev, settings.var_confidence_interval),
        trend_direction=trend_direction(burn, settings.trend_sensitivity),
        spend_this_period=spend_this_period,
        spend_last_period=spend_last_period,
        spend_last_period_full=spend_prev_full,
        spend_same_period_last_year=spend_last_year,
        yoy_change_percentage=yoy,
        projected_cycle_end_spend=quantize(projected_variable + fixed_this_period + upcoming_overhead),
        projected_balance_at_next_salary=projected_balance,
        upcoming_expected_payments=upcoming_overhead,
        last_detected_salary_amount=cycle.last_salary_amount,
        days_until_next_salary=int(round(days_until)),
        average_cycle_days=cycle.avg_cycle_days,
        period_start=cycle.period_start,
        salary_source=cycle.source,
        runway_probability=probability,
        top_categories=tuple(categories[: settings.report_category_limit]),
        upcoming_fixed_costs=tuple(upcoming),
    )
