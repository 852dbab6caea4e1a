"""Pay-cycle detection: salary anchors, period windows and cycle length"""

from datetime import date, timedelta
from decimal import Decimal
from typing import List, Sequence, Tuple

from runway_engine.config import EngineSettings
from runway_engine.domain.classifier import is_income_category
from runway_engine.domain.models import CycleWindow, SalarySource, Transaction


def is_salary(txn: Transaction, settings: EngineSettings) -> bool:
    """Description contains any salary keyword (sign-agnostic)"""
    if not txn.description:
        return False
    upper = txn.description.upper()
    return any(k in upper for k in settings.salary_keyword_list)


def find_salary_payments(
    history: Sequence[Transaction],
    settings: EngineSettings,
    today: date,
) -> Tuple[List[Transaction], SalarySource]:
    """
    Salary-like transactions, newest first.

    Keyword matches win. Without any, the newest large credit (or income
    labelled credit) inside the fallback lookback is used on its own.
    """
    past = [t for t in history if t.date <= today]

    by_keyword = sorted((t for t in past if is_salary(t, settings)), key=lambda t: t.date, reverse=True)
    if by_keyword:
        return by_keyword, SalarySource.KEYWORD

    lookback_start = today - timedelta(days=settings.salary_fallback_days)
    threshold = Decimal(str(settings.salary_fallback_threshold))
    candidates = sorted(
        (
            t
            for t in past
            if t.date >= lookback_start
            and t.is_income
            and (t.amount > threshold or is_income_category(t.category, settings))
        ),
        key=lambda t: t.date,
        reverse=True,
    )
    if candidates:
        return candidates[:1], SalarySource.FALLBACK

    return [], SalarySource.ASSUMED


def average_cycle_days(salary_dates: Sequence[date], settings: EngineSettings) -> float:
    """Mean gap between consecutive salary dates, clamped to the configured bounds"""
    gaps = [(a - b).days for a, b in zip(salary_dates, salary_dates[1:])]
    if not gaps:
        return float(settings.clamped_default_cycle_days)
    avg = sum(gaps) / len(gaps)
    return float(min(max(avg, settings.min_cycle_days), settings.max_cycle_days))


def resolve_cycle(
    history: Sequence[Transaction],
    settings: EngineSettings,
    today: date,
) -> CycleWindow:
    """Derive the current and previous pay-cycle windows from salary history"""
    payments, source = find_salary_payments(history, settings, today)

    # Several credits on one payday collapse to a single anchor
    salary_dates = tuple(sorted({t.date for t in payments}, reverse=True))

    if salary_dates:
        period_start = salary_dates[0]
    else:
        period_start = today - timedelta(days=settings.assumed_days_since_salary)

    earlier = [d for d in salary_dates if d < period_start]
    if earlier:
        prev_period_start = earlier[0]
    else:
        prev_period_start = period_start - timedelta(days=settings.fallback_previous_period_days)
    prev_period_end = period_start

    days_into_period = max(1, (today - period_start).days + 1)
    avg_cycle = average_cycle_days(salary_dates, settings)
    days_until_next_salary = max(1.0, avg_cycle - (today - period_start).days)

    compare_date = min(prev_period_start + timedelta(days=days_into_period), prev_period_end)

    return CycleWindow(
        period_start=period_start,
        prev_period_start=prev_period_start,
        prev_period_end=prev_period_end,
        compare_date=compare_date,
        days_into_period=days_into_period,
        avg_cycle_days=avg_cycle,
        days_until_next_salary=float(days_until_next_salary),
        salary_dates=salary_dates,
        last_salary_amount=payments[0].magnitude if payments else Decimal("0"),
        source=source,
    )
