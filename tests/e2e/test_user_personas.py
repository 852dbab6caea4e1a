"""
E2E tests for account-owner personas run through the service layer.

User personas:
- new user: no history, assumed pay cycle
- salaried saver: monthly salary, rent debit order, streaming, daily groceries
- overspender: small balance, heavy daily spend
- gig worker: no salary keyword, one large client payment
- volatile spender: lumpy spend, compared under thin and fat tails
"""

from datetime import date
from decimal import Decimal

import pytest

from runway_engine import service
from runway_engine.config import load_settings
from runway_engine.domain.models import SalarySource, TrendDirection


@pytest.mark.integration
def test_new_user(engine_settings, today):
    """
    No transactions at all
    Expected: valid report on an assumed cycle, survival from balance alone
    """
    report = service.analyze_health([], Decimal("2500"), engine_settings, today)

    assert report.salary_source is SalarySource.ASSUMED
    assert report.average_cycle_days == 30.0
    assert report.runway_probability == 100.0
    assert report.top_categories == ()
    assert report.upcoming_fixed_costs == ()


@pytest.mark.integration
def test_salaried_saver(sample_transactions, engine_settings, today):
    """
    Regular salary with fixed obligations covered
    Expected: keyword cycle, Netflix still upcoming, groceries stable
    """
    report = service.analyze_health(sample_transactions, Decimal("40000"), engine_settings, today)

    assert report.salary_source is SalarySource.KEYWORD
    assert report.period_start == date(2025, 6, 12)
    assert report.days_until_next_salary == 27
    assert report.runway_probability >= 99
    assert [u.name for u in report.upcoming_fixed_costs] == ["NETFLIX COM"]
    assert report.upcoming_expected_payments == Decimal("199.00")
    assert report.variable_daily_burn == pytest.approx(200.0)
    assert report.fixed_daily_cost == pytest.approx(8199 / 30)
    assert report.trend_direction is TrendDirection.STABLE

    groceries = report.top_categories[0]
    assert groceries.name == "Groceries"
    assert groceries.is_stable is True
    assert groceries.is_fixed_cost is False


@pytest.mark.integration
def test_overspender(make_txn, engine_settings, today):
    """
    Spends 400 a day with 500 left
    Expected: no chance of reaching payday, runway of about a day
    """
    history = [make_txn(d, -400, "SPAR KLOOF", "Groceries") for d in range(1, 91)]

    report = service.analyze_health(history, Decimal("500"), engine_settings, today)

    assert report.runway_probability == 0.0
    assert report.expected_runway_days == pytest.approx(1.25)
    assert report.projected_balance_at_next_salary < 0


@pytest.mark.integration
def test_gig_worker(make_txn, engine_settings, today):
    """
    Paid by invoice, never labelled as salary
    Expected: large credit used as the cycle anchor
    """
    history = [
        make_txn(10, 12000, "CLIENT INV 221"),
        make_txn(3, -350, "UBER EATS"),
        make_txn(2, 800, "CLIENT INV 222"),
    ]

    report = service.analyze_health(history, Decimal("9000"), engine_settings, today)

    assert report.salary_source is SalarySource.FALLBACK
    assert report.period_start == date(2025, 6, 5)
    assert report.last_detected_salary_amount == Decimal("12000")


@pytest.mark.integration
def test_volatile_spender_fat_tails(make_txn, today):
    """
    Lumpy weekly spikes
    Expected: fatter tails give a more conservative survival probability
    """
    history = [make_txn(d, -(400 if d % 7 == 0 else 50), "PICK N PAY") for d in range(1, 91)]

    fat = service.analyze_health(history, Decimal("6000"), load_settings(degrees_of_freedom=3), today)
    thin = service.analyze_health(history, Decimal("6000"), load_settings(degrees_of_freedom=30), today)

    assert fat.burn_volatility > 0
    assert fat.projected_balance_at_next_salary > 0
    assert fat.runway_probability < thin.runway_probability
