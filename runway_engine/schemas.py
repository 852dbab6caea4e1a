"""Pydantic schemas for ledger payloads and the serialized health report"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from runway_engine.domain.models import (
    AdjustmentType,
    FinancialHealthReport,
    PriceChange,
    ScenarioAdjustment,
    Transaction,
)


class TransactionSchema(BaseModel):
    """Transaction as delivered by the ledger collaborator"""

    transaction_id: str = Field(..., min_length=1, alias="id")
    date: date
    description: Optional[str] = None
    amount: Decimal = Field(..., description="Signed amount, negative for expenses")
    category: Optional[str] = None
    notes: Optional[str] = None

    model_config = {"populate_by_name": True}

    def to_domain(self) -> Transaction:
        return Transaction(
            transaction_id=self.transaction_id,
            date=self.date,
            description=self.description,
            amount=self.amount,
            category=self.category,
            notes=self.notes,
        )


class AdjustmentSchema(BaseModel):
    """Single what-if adjustment"""

    type: AdjustmentType
    amount: Decimal = Field(..., gt=0)
    description: str = ""

    def to_domain(self) -> ScenarioAdjustment:
        return ScenarioAdjustment(type=self.type, amount=self.amount, description=self.description)


class CategorySpendSchema(BaseModel):
    name: str
    amount: float
    change_amount: float
    change_percentage: float
    is_stable: bool
    is_fixed_cost: bool


class UpcomingExpenseSchema(BaseModel):
    name: str
    expected_amount: float


class PriceChangeSchema(BaseModel):
    name: str
    previous_amount: float
    latest_amount: float
    change_percentage: float
    latest_date: date

    @classmethod
    def from_domain(cls, change: PriceChange) -> "PriceChangeSchema":
        return cls(
            name=change.name,
            previous_amount=float(change.previous_amount),
            latest_amount=float(change.latest_amount),
            change_percentage=float(change.change_percentage),
            latest_date=change.latest_date,
        )


class HealthReportSchema(BaseModel):
    """Flat JSON view of a FinancialHealthReport for summarizers and chart renderers"""

    current_balance: float
    variable_daily_burn: float
    fixed_daily_cost: float
    true_daily_burn: float
    monthly_burn_rate: float
    burn_volatility: float
    safe_runway_days: float
    expected_runway_days: float
    optimistic_runway_days: float
    value_at_risk_95: float
    trend_direction: str
    spend_this_period: float
    spend_last_period: float
    spend_last_period_full: float
    spend_same_period_last_year: float
    yoy_change_percentage: Optional[float] = None
    projected_cycle_end_spend: float
    projected_balance_at_next_salary: float
    upcoming_expected_payments: float
    last_detected_salary_amount: float
    days_until_next_salary: int
    average_cycle_days: float
    period_start: date
    salary_source: str
    runway_probability: float = Field(..., ge=0, le=100)
    top_categories: List[CategorySpendSchema]
    upcoming_fixed_costs: List[UpcomingExpenseSchema]

    @classmethod
    def from_report(cls, report: FinancialHealthReport) -> "HealthReportSchema":
        return cls(
            current_balance=float(report.current_balance),
            variable_daily_burn=report.variable_daily_burn,
            fixed_daily_cost=report.fixed_daily_cost,
            true_daily_burn=report.true_daily_burn,
            monthly_burn_rate=report.monthly_burn_rate,
            burn_volatility=report.burn_volatility,
            safe_runway_days=report.safe_runway_days,
            expected_runway_days=report.expected_runway_days,
            optimistic_runway_days=report.optimistic_runway_days,
            value_at_risk_95=report.value_at_risk_95,
            trend_direction=report.trend_direction.value,
            spend_this_period=float(report.spend_this_period),
            spend_last_period=float(report.spend_last_period),
            spend_last_period_full=float(report.spend_last_period_full),
            spend_same_period_last_year=float(report.spend_same_period_last_year),
            yoy_change_percentage=report.yoy_change_percentage,
            projected_cycle_end_spend=float(report.projected_cycle_end_spend),
            projected_balance_at_next_salary=float(report.projected_balance_at_next_salary),
            upcoming_expected_payments=float(report.upcoming_expected_payments),
            last_detected_salary_amount=float(report.last_detected_salary_amount),
            days_until_next_salary=report.days_until_next_salary,
            average_cycle_days=report.average_cycle_days,
            period_start=report.period_start,
            salary_source=report.salary_source.value,
            runway_probability=report.runway_probability,
            top_categories=[
                CategorySpendSchema(
                    name=c.name,
                    amount=float(c.amount),
                    change_amount=float(c.change_amount),
                    change_percentage=float(c.change_percentage),
                    is_stable=c.is_stable,
                    is_fixed_cost=c.is_fixed_cost,
                )
                for c in report.top_categories
            ],
            upcoming_fixed_costs=[
                UpcomingExpenseSchema(name=u.name, expected_amount=float(u.expected_amount))
                for u in report.upcoming_fixed_costs
            ],
        )


def report_to_dict(report: FinancialHealthReport) -> Dict[str, Any]:
    """JSON-ready dict of the report"""
    return HealthReportSchema.from_report(report).model_dump(mode="json")
