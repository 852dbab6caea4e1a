"""
Fat-tailed solvency model.

Survival probability is the Student's t CDF of the projected balance at the
next salary, scaled by burn volatility over the days remaining. A normal model
understates large one-off shocks; the t tails are heavier for small degrees
of freedom, which makes the estimate more conservative.
"""

import math
from typing import Tuple

from runway_engine.domain.exceptions import InvalidConfigurationError

# Abramowitz & Stegun 7.1.26 coefficients (|error| < 1.5e-7)
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def normal_cdf(x: float) -> float:
    """Standard normal CDF via the Abramowitz-Stegun erf approximation"""
    sign = -1.0 if x < 0 else 1.0
    z = abs(x) / math.sqrt(2.0)
    t = 1.0 / (1.0 + _P * z)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * math.exp(-z * z)
    return 0.5 * (1.0 + sign * y)


def student_t_cdf(t: float, dof: float) -> float:
    """
    Student's t CDF through Bailey's normalizing transform:

        z = t * (1 - 1/(4v)) / sqrt(1 + t^2 / (2v))

    Valid for v > 1.
    """
    if dof <= 1:
        raise InvalidConfigurationError(f"Degrees of freedom must exceed 1, got {dof}")
    z = t * (1 - 1 / (4 * dof)) / math.sqrt(1 + t * t / (2 * dof))
    return normal_cdf(z)


def survival_probability(
    projected_balance: float,
    daily_std_dev: float,
    days_until_next_salary: float,
    degrees_of_freedom: float,
) -> float:
    """Percentage chance in [0, 100] that the balance stays non-negative until payday"""
    if daily_std_dev <= 0:
        return 100.0 if projected_balance > 0 else 0.0

    t = projected_balance / (daily_std_dev * math.sqrt(max(days_until_next_salary, 1.0)))
    probability = student_t_cdf(t, degrees_of_freedom) * 100
    return min(max(probability, 0.0), 100.0)


def runway_days(available: float, true_daily_burn: float, std_dev: float) -> Tuple[float, float, float]:
    """
    (safe, expected, optimistic) days the available balance lasts.

    Safe assumes burn one standard deviation high, optimistic one low (never
    below one unit a day).
    """
    burn = max(true_daily_burn, 1.0)
    safe = available / (burn + std_dev)
    expected = available / burn
    optimistic = available / max(burn - std_dev, 1.0)
    return safe, expected, optimistic


def value_at_risk(weighted_mean: float, std_dev: float, z_score: float) -> float:
    """One-day spend not expected to be exceeded at the z_score confidence"""
    return weighted_mean + z_score * std_dev
