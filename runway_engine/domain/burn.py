"""Exponentially weighted burn-rate estimation over daily variable spend"""

import math
from collections import defaultdict
from datetime import date, timedelta
from functools import reduce
from typing import Dict, Iterable, List, Tuple

from runway_engine.domain.exceptions import InvalidConfigurationError
from runway_engine.domain.models import BurnEstimate, Transaction
from runway_engine.utils.date_utils import generate_date_range

MIN_DAILY_BURN = 1.0


def daily_spend_series(expenses: Iterable[Transaction], start: date, days: int) -> List[float]:
    """Summed expense magnitude per day from start, zero-filled for quiet days"""
    end = start + timedelta(days=days)
    by_day: Dict[date, float] = defaultdict(float)
    for txn in expenses:
        if start <= txn.date < end and txn.is_expense:
            by_day[txn.date] += float(txn.magnitude)
    return [by_day.get(day, 0.0) for day in generate_date_range(start, days)]


def ewma_step(alpha: float):
    """Reducer for (mean, variance) state over one new observation"""

    def step(state: Tuple[float, float], spend: float) -> Tuple[float, float]:
        mean, var = state
        delta = spend - mean
        return mean + alpha * delta, (1 - alpha) * (var + alpha * delta * delta)

    return step


def ewma(series: List[float], alpha: float) -> Tuple[float, float]:
    """Exponentially weighted (mean, variance), seeded with the first observation"""
    if not series:
        return 0.0, 0.0
    return reduce(ewma_step(alpha), series[1:], (series[0], 0.0))


def estimate_burn(
    variable_expenses: Iterable[Transaction],
    window_days: int,
    alpha: float,
    today: date,
) -> BurnEstimate:
    """
    Smoothed daily burn and volatility over the completed days [today - window_days, today).

    The mean is floored to one currency unit so runway maths never divides by zero.

    Raises:
        InvalidConfigurationError: If alpha is outside (0, 1) or window_days is not positive
    """
    if not 0 < alpha < 1:
        raise InvalidConfigurationError(f"Smoothing factor must be in (0, 1), got {alpha}")
    if window_days <= 0:
        raise InvalidConfigurationError(f"Analysis window must be positive, got {window_days}")

    series = daily_spend_series(variable_expenses, today - timedelta(days=window_days), window_days)
    mean, var = ewma(series, alpha)

    return BurnEstimate(
        weighted_mean=mean,
        daily_burn=mean if mean > 0 else MIN_DAILY_BURN,
        std_dev=math.sqrt(max(var, 0.0)),
        simple_average=sum(series) / window_days,
    )
