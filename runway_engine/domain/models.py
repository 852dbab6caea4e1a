"""Domain models - immutable dataclasses for ledger input and the health report"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction supplied by the banking collaborator"""

    transaction_id: str
    date: date
    description: Optional[str]
    amount: Decimal  # negative = expense, positive = income
    category: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def magnitude(self) -> Decimal:
        return abs(self.amount)


class SalarySource(str, Enum):
    """How the current pay-cycle anchor was found"""

    KEYWORD = "keyword"
    FALLBACK = "fallback"
    ASSUMED = "assumed"


class TrendDirection(str, Enum):
    INCREASING = "Increasing"
    DECREASING = "Decreasing"
    STABLE = "Stable"


@dataclass(frozen=True)
class CycleWindow:
    """Current and previous pay-cycle boundaries, half-open [start, end)"""

    period_start: date
    prev_period_start: date
    prev_period_end: date
    compare_date: date
    days_into_period: int
    avg_cycle_days: float
    days_until_next_salary: float
    salary_dates: Tuple[date, ...] = ()
    last_salary_amount: Decimal = Decimal("0")
    source: SalarySource = SalarySource.ASSUMED


@dataclass(frozen=True)
class BurnEstimate:
    """Smoothed daily variable spend and its volatility"""

    weighted_mean: float
    daily_burn: float
    std_dev: float
    simple_average: float


@dataclass(frozen=True)
class CategorySpend:
    """Discretionary category compared against its hybrid baseline"""

    name: str
    amount: Decimal
    change_amount: Decimal
    change_percentage: Decimal
    is_stable: bool
    is_fixed_cost: bool


@dataclass(frozen=True)
class UpcomingExpense:
    """Fixed cost expected before the cycle closes (a forecast, not a ledger entry)"""

    name: str
    expected_amount: Decimal


@dataclass(frozen=True)
class FinancialHealthReport:
    """Output of a single health analysis"""

    current_balance: Decimal
    variable_daily_burn: float
    fixed_daily_cost: float
    true_daily_burn: float
    monthly_burn_rate: float
    burn_volatility: float
    safe_runway_days: float
    expected_runway_days: float
    optimistic_runway_days: float
    value_at_risk_95: float
    trend_direction: TrendDirection
    spend_this_period: Decimal
    spend_last_period: Decimal
    spend_last_period_full: Decimal
    spend_same_period_last_year: Decimal
    yoy_change_percentage: Optional[float]
    projected_cycle_end_spend: Decimal
    projected_balance_at_next_salary: Decimal
    upcoming_expected_payments: Decimal
    last_detected_salary_amount: Decimal
    days_until_next_salary: int
    average_cycle_days: float
    period_start: date
    salary_source: SalarySource
    runway_probability: float
    top_categories: Tuple[CategorySpend, ...] = ()
    upcoming_fixed_costs: Tuple[UpcomingExpense, ...] = ()


class AdjustmentType(str, Enum):
    ONE_OFF_EXPENSE = "OneOffExpense"
    ONE_OFF_INCOME = "OneOffIncome"
    MONTHLY_EXPENSE = "MonthlyExpense"
    MONTHLY_INCOME = "MonthlyIncome"


@dataclass(frozen=True)
class ScenarioAdjustment:
    """What-if change applied to history and balance before analysis"""

    type: AdjustmentType
    amount: Decimal  # always a positive magnitude
    description: str = ""


@dataclass(frozen=True)
class PriceChange:
    """Recurring charge that went up against its previous occurrence"""

    name: str
    previous_amount: Decimal
    latest_amount: Decimal
    change_percentage: Decimal
    latest_date: date
